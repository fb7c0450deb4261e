"""Manifest parsers: auto-registered on import."""

from dephealth.engines.dependency_scanner.parsers import (
    npm_package_json,  # noqa: F401
    pip_requirements,  # noqa: F401
    pipfile,  # noqa: F401
    pyproject_toml,  # noqa: F401
    setup_py,  # noqa: F401
)
