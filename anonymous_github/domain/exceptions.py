class AnonymousGitHubException(Exception):
    """Base exception for all anonymous-github errors."""
    pass

class InvalidTokenException(AnonymousGitHubException):
    """Raised when a token does not unseal to a usable configuration."""
    def __init__(self, message: str = "Invalid encrypted configuration"):
        super().__init__(message)

class InvalidRequestException(AnonymousGitHubException):
    """Raised when caller input is missing required fields."""
    pass

class RepositoryValidationException(AnonymousGitHubException):
    """Raised when a repository or branch cannot be published."""
    pass

class GitHubApiException(AnonymousGitHubException):
    """Raised when the GitHub REST API cannot satisfy a request."""
    pass

class NotFoundException(GitHubApiException):
    """Raised when GitHub answers 404 for a repository, ref or path."""
    pass

class RepositoryAccessDeniedException(GitHubApiException):
    """Raised when GitHub answers 403 without a rate limit signal."""
    pass

class RateLimitExceededException(GitHubApiException):
    """Raised when the GitHub REST rate limit is hit."""
    def __init__(self, reset_at: str, message: str = "GitHub API rate limit exceeded."):
        self.reset_at = reset_at
        super().__init__(f"{message} Resets at: {reset_at}")
