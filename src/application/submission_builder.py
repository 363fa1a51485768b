import re
from datetime import date, datetime, timezone
from typing import Optional

from yarl import URL

from src.domain.models import ServerRecord, ServerSubmission

GITHUB_BASE_URL = URL("https://github.com")
DEFAULT_HUB_REPOSITORY = "seefor/network-mcp-hub"

COMPLETENESS_FIELDS = (
    "name", "description", "author", "repository", "category", "language", "complexity",
)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

ISSUE_BODY_TEMPLATE = """## New MCP Server Submission

**Server Name:** {name}
**Author:** {author}
**Repository:** {repository}
**Category:** {category}
**Language:** {language}
**Complexity:** {complexity}

**Description:**
{description}

**Features:**
{features}

**Installation Command:**
```
{install_command}
```

**Configuration Example:**
```json
{config_example}
```

**Tags:** {tags}

**Server JSON Data:**
```json
{document}
```

---
*This submission was created using the Network MCP Hub submission form.*"""


def slugify(name: str) -> str:
    """'My Cool Server!!' -> 'my-cool-server'"""
    return _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")


def is_complete(submission: ServerSubmission) -> bool:
    """True when every field needed to build a record has been filled in."""
    return all(getattr(submission, field) for field in COMPLETENESS_FIELDS)


def build_record(submission: ServerSubmission, today: Optional[date] = None) -> ServerRecord:
    """
    Assembles a catalog record from a submission.

    The id is derived from the name, the freshness date is set to ``today``
    and the star counter starts at zero. Id collisions are not checked here;
    the catalog service guards against duplicates when the record is added.

    Args:
        submission (ServerSubmission): A submission that passed ``is_complete``.
        today (Optional[date]): Build date, defaults to the current UTC date.

    Returns:
        ServerRecord: The assembled record.
    """
    build_date = today or datetime.now(timezone.utc).date()
    return ServerRecord(
        id=slugify(submission.name or ""),
        name=submission.name or "",
        description=submission.description or "",
        author=submission.author or "",
        repository=submission.repository or "",
        documentation=submission.documentation,
        tags=list(submission.tags),
        category=submission.category,
        language=submission.language,
        complexity=submission.complexity,
        install_command=submission.install_command,
        config_example=submission.config_example,
        features=[feature for feature in submission.features if feature.strip()],
        last_updated=build_date.isoformat(),
        stars=0,
    )


def to_json_document(record: ServerRecord) -> str:
    """Pretty-printed JSON payload offered as a file download."""
    return record.model_dump_json(indent=2, by_alias=True, exclude_none=True)


def download_filename(record: ServerRecord) -> str:
    return f"{record.id}.json"


def to_issue_title(record: ServerRecord) -> str:
    return f"Add Server: {record.name}"


def to_issue_body(record: ServerRecord) -> str:
    """Markdown issue body with the readable fields and the JSON document appended."""
    return ISSUE_BODY_TEMPLATE.format(
        name=record.name,
        author=record.author,
        repository=record.repository,
        category=record.category.value,
        language=record.language.value,
        complexity=record.complexity.value,
        description=record.description,
        features="\n".join(f"- {feature}" for feature in record.features),
        install_command=record.install_command or "",
        config_example=record.config_example or "",
        tags=", ".join(record.tags),
        document=to_json_document(record),
    )


def build_issue_url(record: ServerRecord, repository: str = DEFAULT_HUB_REPOSITORY) -> str:
    """Pre-filled 'new issue' URL on the hub repository."""
    url = GITHUB_BASE_URL.with_path(f"/{repository}/issues/new").with_query(
        title=to_issue_title(record),
        body=to_issue_body(record),
    )
    return str(url)
