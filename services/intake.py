import os
from pathlib import Path
from typing import Optional

ACCEPTED_EXTENSIONS = [".pdf", ".docx", ".txt"]
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


def file_extension(file_name: str) -> str:
    """Lowercased extension without the dot, '' when there is none."""
    return Path(file_name).suffix.lower().lstrip(".")


def validate_file(file_name: str, size: int) -> Optional[str]:
    """Return an error message for a file the uploader must fix, else None."""
    if Path(file_name).suffix.lower() not in ACCEPTED_EXTENSIONS:
        return f"Invalid file type. Please upload {', '.join(ACCEPTED_EXTENSIONS)} files only."
    if size > MAX_FILE_SIZE:
        return "File size must be less than 10MB."
    return None


def storage_name(file_name: str) -> str:
    # unique name so repeated uploads of the same file never overwrite each other
    path = Path(file_name)
    return f"{path.stem}_{os.urandom(8).hex()}{path.suffix.lower()}"
