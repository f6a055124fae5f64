from prepkb.parsing.frontmatter import parse_frontmatter

__all__ = ["parse_frontmatter"]
