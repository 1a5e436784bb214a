"""Input path resolution for CLI commands."""

from pathlib import Path

PLAN_HINT = "Generate one with: terraform show -json plan.tfplan > plan.json"


def resolve_file_path(file_path: str, label: str = "Plan file") -> Path:
    """
    Resolve a user-supplied input path against the working directory.

    Args:
        file_path: Absolute path, or path relative to the current directory
        label: What the file is, for error messages

    Returns:
        Resolved Path to an existing regular file

    Raises:
        FileNotFoundError: If the path does not exist or is not a file
    """
    path = Path(file_path).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    path = path.resolve()

    if not path.exists():
        raise FileNotFoundError(f"{label} not found: {file_path}. {PLAN_HINT}")

    if not path.is_file():
        raise FileNotFoundError(f"{label} is not a file: {file_path}")

    return path
