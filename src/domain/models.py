from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    DATABASE = "database"
    FILESYSTEM = "filesystem"
    WEB_API = "web-api"
    PRODUCTIVITY = "productivity"
    DEVELOPMENT = "development"
    NETWORK = "network"
    FIREWALL = "firewall"
    ROUTER = "router"
    NCCM = "nccm"
    SWITCHES = "switches"
    OTHER = "other"


class Language(str, Enum):
    PYTHON = "python"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    GO = "go"
    RUST = "rust"
    OTHER = "other"


class Complexity(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


COMPLEXITY_RANK: Dict[str, int] = {
    Complexity.BEGINNER.value: 1,
    Complexity.INTERMEDIATE.value: 2,
    Complexity.ADVANCED.value: 3,
}


class SortKey(str, Enum):
    NAME = "name"
    STARS = "stars"
    LAST_UPDATED = "lastUpdated"
    COMPLEXITY = "complexity"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ServerRecord(BaseModel):
    """
    Immutable catalog entry describing one MCP server.
    Wire names are camelCase (``lastUpdated``), attributes are snake_case.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Slug identifier, unique across the catalog")
    name: str = Field(..., description="Display name of the server")
    description: str = Field(..., description="Free-text description")
    author: str = Field(..., description="Author or maintainer handle")
    repository: str = Field(..., description="Source repository URL")
    documentation: Optional[str] = Field(None, description="Documentation URL")
    tags: List[str] = Field(default_factory=list)
    category: Category
    language: Language
    complexity: Complexity
    install_command: Optional[str] = None
    config_example: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    last_updated: str = Field(..., description="Freshness date in YYYY-MM-DD form")
    stars: Optional[int] = Field(None, ge=0, description="Advisory popularity counter")

    def to_document(self) -> Dict[str, Any]:
        """Returns the JSON-ready mapping stored in the catalog file."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ServerSubmission(BaseModel):
    """Partial record filled in by a visitor before it is turned into a ServerRecord."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    repository: Optional[str] = None
    documentation: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    category: Optional[Category] = None
    language: Optional[Language] = None
    complexity: Optional[Complexity] = None
    install_command: Optional[str] = None
    config_example: Optional[str] = None
    features: List[str] = Field(default_factory=list)


class CatalogQuery(BaseModel):
    # "all" is the no-filter sentinel for the enum filters
    text: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    complexity: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class RecordIssue(BaseModel):
    index: int
    name: str
    errors: List[str]


class CatalogValidationReport(BaseModel):
    total_records: int
    issues: List[RecordIssue] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(len(issue.errors) for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.issues


class RepositoryStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    stars: int = Field(0, ge=0, description="Total number of stargazers")
    forks: int = Field(0, ge=0, description="Total number of forks")


class ContributorProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str = ""
    contributions: int = 0
    name: str
    company: Optional[str] = None
    blog: Optional[str] = None


class CommunityStats(BaseModel):
    total_contributors: int = 0
    total_stars: int = 0
    total_forks: int = 0
    active_discussions: int = 0
    total_servers: int = 0
    monthly_growth: int = 0
