import asyncio
import json
import os
import sys
import logging
from pathlib import Path

import aiohttp
import click
from dotenv import load_dotenv
from pydantic import ValidationError

from src.application.catalog_service import CatalogService
from src.application.community_service import CommunityService
from src.application.submission_builder import (
    DEFAULT_HUB_REPOSITORY,
    build_issue_url,
    build_record,
    download_filename,
    is_complete,
    to_json_document,
)
from src.domain.exceptions import CatalogException, SchemaViolationException
from src.domain.models import CatalogQuery, ServerSubmission, SortKey, SortOrder
from src.domain.validation import validate_record
from src.infrastructure.catalog_store import JsonCatalogRepository
from src.infrastructure.github_client import GitHubRESTClient

DEFAULT_CATALOG_PATH = "public/data/servers.json"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )


def _read_json_file(path: str):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error reading JSON file {path}: {e}")
        sys.exit(1)


@click.group()
@click.option(
    "--catalog",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the servers.json catalog (overrides CATALOG_PATH)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Set log level (overrides LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, catalog, log_level) -> None:
    """Maintain and query the MCP server catalog."""
    # Load environment variables from .env file
    load_dotenv()
    configure_logging(log_level or os.getenv("LOG_LEVEL", "INFO"))

    catalog_path = catalog or os.getenv("CATALOG_PATH", DEFAULT_CATALOG_PATH)
    ctx.obj = {
        "catalog_service": CatalogService(JsonCatalogRepository(catalog_path)),
        "hub_repository": os.getenv("HUB_REPOSITORY", DEFAULT_HUB_REPOSITORY),
        "github_token": os.getenv("GITHUB_TOKEN"),
    }


@cli.command()
@click.pass_obj
def validate(obj) -> None:
    """Validate every server in the catalog."""
    try:
        report = obj["catalog_service"].validate_all()
    except CatalogException as e:
        logger.error(f"Error validating servers: {e}")
        sys.exit(1)

    for issue in report.issues:
        logger.error(f"Server \"{issue.name}\" (index {issue.index}):")
        for error in issue.errors:
            logger.error(f"  - {error}")

    if not report.is_valid:
        sys.exit(1)


@cli.command()
@click.argument("server_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def add(obj, server_file) -> None:
    """Add a new server from a JSON file."""
    candidate = _read_json_file(server_file)
    try:
        obj["catalog_service"].add_record(candidate)
    except SchemaViolationException as e:
        logger.error("Validation failed:")
        for error in e.errors:
            logger.error(f"  - {error}")
        sys.exit(1)
    except CatalogException as e:
        logger.error(f"Error processing server: {e}")
        sys.exit(1)


@cli.command()
@click.argument("submission_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory the generated <id>.json is written to",
)
@click.pass_obj
def submit(obj, submission_file, output) -> None:
    """Build a server document from a partial submission and print the issue URL."""
    raw = _read_json_file(submission_file)
    try:
        submission = ServerSubmission.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Invalid submission: {e}")
        sys.exit(1)

    if not is_complete(submission):
        logger.error("Please fill in all required fields.")
        sys.exit(1)

    record = build_record(submission)
    for error in validate_record(record.to_document()):
        logger.warning(f"Submission check: {error}")

    target = Path(output) / download_filename(record)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_json_document(record) + "\n", encoding="utf-8")
    logger.info(f"Server data written to {target}.")

    click.echo(build_issue_url(record, obj["hub_repository"]))


@cli.command()
@click.option("--text", default=None, help="Case-insensitive text to look for")
@click.option("--category", default=None, help="Category filter, or 'all'")
@click.option("--language", default=None, help="Language filter, or 'all'")
@click.option("--complexity", default=None, help="Complexity filter, or 'all'")
@click.option("--tag", "tags", multiple=True, help="Tag filter; repeat for several tags")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([key.value for key in SortKey]),
    default=SortKey.NAME.value,
    show_default=True,
)
@click.option(
    "--order",
    type=click.Choice([order.value for order in SortOrder]),
    default=SortOrder.ASC.value,
    show_default=True,
)
@click.pass_obj
def search(obj, text, category, language, complexity, tags, sort_key, order) -> None:
    """Search, filter and sort the catalog."""
    query = CatalogQuery(
        text=text,
        category=category,
        language=language,
        complexity=complexity,
        tags=list(tags),
    )
    try:
        records = obj["catalog_service"].search(query, sort_key, order)
    except CatalogException as e:
        logger.error(f"Error loading servers: {e}")
        sys.exit(1)

    for record in records:
        click.echo(
            f"{record.name} ({record.id}) | {record.category.value} | "
            f"{record.language.value} | {record.complexity.value} | "
            f"stars: {record.stars or 0} | updated: {record.last_updated}"
        )
    click.echo(f"Showing {len(records)} servers")


async def _collect_stats(
    github_client: GitHubRESTClient,
    hub_repository: str,
    total_servers: int,
    include_contributors: bool = False,
):
    community_service = CommunityService(github_client=github_client, repository=hub_repository)
    async with aiohttp.ClientSession() as session:
        community_stats = await community_service.get_community_stats(session, total_servers)
        contributors = await community_service.get_contributors(session) if include_contributors else []
    return community_stats, contributors


@cli.command()
@click.option(
    "--contributors",
    "include_contributors",
    is_flag=True,
    default=False,
    help="Also list the top contributors with their profile details",
)
@click.pass_obj
def stats(obj, include_contributors) -> None:
    """Print community statistics for the hub repository."""
    try:
        total_servers = len(obj["catalog_service"].repository.load())
    except CatalogException as e:
        logger.warning(f"Catalog unavailable, counting 0 servers: {e}")
        total_servers = 0

    github_client = GitHubRESTClient(token=obj["github_token"])
    community_stats, contributors = asyncio.run(
        _collect_stats(github_client, obj["hub_repository"], total_servers, include_contributors)
    )
    click.echo(community_stats.model_dump_json(indent=2))

    for contributor in contributors:
        click.echo(f"{contributor.name} (@{contributor.login}) | contributions: {contributor.contributions}")


def main():
    try:
        cli()
    except KeyboardInterrupt:
        logger.info("Interrupted by user. Exiting gracefully.")


if __name__ == "__main__":
    main()
