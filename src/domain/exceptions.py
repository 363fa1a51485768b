from typing import List, Optional


class CatalogException(Exception):
    """Base exception for all catalog-related errors."""
    pass

class SchemaViolationException(CatalogException):
    """Raised when a record fails one or more schema checks."""
    def __init__(self, errors: List[str], message: str = "Record failed validation."):
        self.errors = list(errors)
        super().__init__(f"{message} {'; '.join(self.errors)}")

class DuplicateIdentifierException(CatalogException):
    """Raised when appending a record whose id already exists in the catalog."""
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Server with ID '{record_id}' already exists.")

class CatalogFileException(CatalogException):
    """Raised when the catalog file cannot be read, decoded or written."""
    pass

class GitHubAPIException(CatalogException):
    """Raised when a GitHub REST request fails."""
    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)

class RateLimitExceededException(GitHubAPIException):
    """Raised when the GitHub REST rate limit is hit."""
    def __init__(self, reset_at: Optional[str], message: str = "GitHub API rate limit exceeded."):
        self.reset_at = reset_at
        super().__init__(f"{message} Resets at: {reset_at}", status=403)
