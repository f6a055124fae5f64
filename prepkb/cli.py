"""prepkb CLI - content catalog validation and static route export."""

from __future__ import annotations

import json

import click

from prepkb.config import AppConfig, ContentConfig, apply_env_overrides, load_config
from prepkb.errors import CatalogLoadError
from prepkb.logging_utils import configure_logging
from prepkb.pages import topic_page
from prepkb.retrieval.related import RelatedWeights
from prepkb.retrieval.resolver import NOT_FOUND
from prepkb.routing import category_routes, static_params
from prepkb.storage.repository import DocumentRepository


def _load(config_path: str | None) -> AppConfig:
    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()
    cfg = apply_env_overrides(cfg)
    configure_logging(cfg.logging.level)
    return cfg


def _with_content(cfg: AppConfig, content_dir: str | None, strict: bool) -> AppConfig:
    if not content_dir and not strict:
        return cfg
    content = ContentConfig(
        root=content_dir or cfg.content.root,
        file_extensions=cfg.content.file_extensions,
        strict=strict or cfg.content.strict,
    )
    return AppConfig(
        content=content,
        categories=cfg.categories,
        related=cfg.related,
        routes=cfg.routes,
        api=cfg.api,
        logging=cfg.logging,
    )


def _build(cfg: AppConfig, show_progress: bool = False):
    repository = DocumentRepository.from_config(cfg, show_progress=show_progress)
    try:
        return repository.load_all()
    except CatalogLoadError as e:
        click.echo(f"✗ Catalog build failed: {e}", err=True)
        raise click.Abort()


config_option = click.option("--config", "-c", default=None, help="Configuration file path")
content_option = click.option("--content-dir", "-d", default=None, help="Override content root")


@click.group()
def cli():
    """prepkb CLI - content catalog for the interview prep site."""
    pass


@cli.command()
@config_option
def validate(config: str | None):
    """Validate configuration file."""
    cfg = _load(config)

    click.echo("✓ Configuration is valid")
    click.echo(f"  Content root: {cfg.content.root}")
    click.echo(f"  File extensions: {', '.join(cfg.content.file_extensions)}")
    click.echo(f"  Strict: {cfg.content.strict}")
    click.echo(f"  Related limit: {cfg.related.limit}")


@cli.command()
@config_option
@content_option
@click.option("--strict", is_flag=True, help="Fail on the first malformed topic")
@click.option("--progress/--no-progress", default=False, help="Show a progress bar")
def build(config: str | None, content_dir: str | None, strict: bool, progress: bool):
    """Build the catalog and report what was loaded."""
    cfg = _with_content(_load(config), content_dir, strict)
    catalog = _build(cfg, show_progress=progress)
    stats = catalog.stats

    click.echo(f"✓ Loaded {stats.loaded}/{stats.total} topics in {len(catalog.categories)} categories")
    for category in catalog.categories:
        click.echo(f"  {category.slug}: {len(category.topic_slugs)} topics")
    if stats.errors:
        click.echo(f"Skipped: {stats.skipped}")
        for error in stats.errors:
            click.echo(f"  ✗ {error['path']}: {error['error']}")


@cli.command()
@config_option
@content_option
@click.option("--categories", "include_categories", is_flag=True, help="Also list category pages")
def routes(config: str | None, content_dir: str | None, include_categories: bool):
    """Print static path parameters as JSON."""
    cfg = _with_content(_load(config), content_dir, False)
    catalog = _build(cfg)
    if include_categories:
        payload = {
            "topics": static_params(catalog),
            "categories": category_routes(catalog, reserved=cfg.routes.reserved),
        }
    else:
        payload = static_params(catalog)
    click.echo(json.dumps(payload, indent=2))


@cli.command()
@config_option
@content_option
@click.argument("category")
@click.argument("topic")
@click.option("--limit", "-n", type=int, default=None, help="Number of related topics")
def show(config: str | None, content_dir: str | None, category: str, topic: str, limit: int | None):
    """Show one topic's metadata and related topics."""
    cfg = _with_content(_load(config), content_dir, False)
    catalog = _build(cfg)
    page = topic_page(
        catalog,
        category,
        topic,
        limit=cfg.related.limit if limit is None else limit,
        weights=RelatedWeights.from_config(cfg.related),
    )
    if page is NOT_FOUND:
        click.echo(f"✗ Topic not found: {category}/{topic}", err=True)
        raise SystemExit(1)

    document = page.document
    click.echo(f"{document.title} ({page.category.title})")
    click.echo(f"  Difficulty: {document.difficulty.value}")
    if document.metadata.estimated_read_time is not None:
        click.echo(f"  Read time: {document.metadata.estimated_read_time} min")
    if document.tags:
        click.echo(f"  Tags: {', '.join(sorted(document.tags))}")
    click.echo("Related:")
    if not page.related:
        click.echo("  (none)")
    for related in page.related:
        click.echo(f"  [{related.score}] {related.topic.category}/{related.topic.slug}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
