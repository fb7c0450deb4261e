"""GitHub repository reference utilities."""

from __future__ import annotations

from dephealth.exceptions import InvalidRepositoryReference

_GITHUB_PREFIXES = ("https://github.com/", "http://github.com/", "github.com/")


def is_github_reference(location: str) -> bool:
    """True if *location* names a GitHub repository rather than a local path."""
    return isinstance(location, str) and location.startswith(_GITHUB_PREFIXES)


def normalize_github_reference(location: str) -> str:
    """Prefix bare ``github.com/owner/repo`` references with ``https://``."""
    if location.startswith("github.com/"):
        return "https://" + location
    return location


def parse_repo_reference(location: str) -> tuple[str, str]:
    """Extract (owner, repo) from a GitHub reference.

    Handles:
      - https://github.com/owner/repo
      - http://github.com/owner/repo
      - github.com/owner/repo
      - any of the above with a trailing ``/`` or ``.git``

    Raises InvalidRepositoryReference if the owner or repo segment is missing.
    """
    url = normalize_github_reference(location.strip())
    for prefix in _GITHUB_PREFIXES[:2]:
        if url.startswith(prefix):
            path = url[len(prefix):]
            break
    else:
        raise InvalidRepositoryReference(location)

    parts = path.split("/")
    owner = parts[0] if parts else ""
    repo = parts[1] if len(parts) > 1 else ""
    if repo.endswith(".git"):
        repo = repo[:-4]
    if not owner or not repo:
        raise InvalidRepositoryReference(location)
    return owner, repo
