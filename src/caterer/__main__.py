from .config import Config
from .errors import CatererError
from .loading import CatalogLoader
from .logger import log
from .report import render_report
from .search import search as run_search
from .store import CatalogStore

import click


@click.group()
@click.pass_context
def cli(ctx):
    try:
        ctx.obj = Config.from_env()
    except CatererError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None)
@click.option("--db", "db_path", type=click.Path(dir_okay=False), default=None)
@click.pass_obj
def build(config, data_dir=None, db_path=None):
    loader = CatalogLoader(data_dir or config.data_dir, db_path or config.db_path)
    try:
        loader.build()
    except (CatererError, OSError) as e:
        log.error("build_failed", error=str(e))
        raise click.ClickException(str(e))


@cli.command()
@click.argument("identifiers", nargs=-1, required=True)
@click.option("--db", "db_path", type=click.Path(dir_okay=False), default=None)
@click.option("--workers", type=click.IntRange(min=1), default=None)
@click.option("--limit", type=click.IntRange(min=1), default=None)
@click.pass_obj
def search(config, identifiers, db_path=None, workers=None, limit=None):
    log.info("starting_search", identifiers=list(identifiers))

    with CatalogStore(db_path or config.db_path) as store:
        try:
            result = run_search(
                store,
                identifiers,
                workers=workers or config.workers,
                limit=limit or config.limit,
            )
        except CatererError as e:
            log.error("search_failed", error=str(e))
            raise click.ClickException(str(e))

    for root in result.roots:
        click.echo(f"  • Root work {root.title} ({root.start_year})")
    if result.skipped:
        click.echo(
            f"----> Skipped {len(result.skipped)} candidate works missing from the catalog"
        )
    click.echo(f"----> Top {len(result.affinities)} works:")
    for block in render_report(result.affinities):
        click.echo(f"\n\n{block}")


if __name__ == "__main__":
    cli()
