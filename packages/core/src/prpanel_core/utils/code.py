from __future__ import annotations

BINARY_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".ico",
    ".webp",
    ".bmp",
    ".tif",
    ".tiff",
    ".pdf",
    ".woff",
    ".woff2",
    ".ttf",
    ".eot",
    ".otf",
    ".mp4",
    ".mov",
    ".avi",
    ".mp3",
    ".wav",
    ".ogg",
    ".zip",
    ".tar",
    ".gz",
    ".rar",
    ".7z",
    ".jar",
    ".exe",
    ".dll",
    ".so",
    ".dylib",
    ".bin",
    ".class",
    ".pyc",
    ".o",
    ".a",
    ".db",
    ".sqlite",
}


def extension(file_name: str) -> str:
    """Return the lowercase extension including the dot, or "" when there is none."""
    base = file_name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:].lower() if dot > 0 else ""


def is_binary_file(file_name: str) -> bool:
    return extension(file_name) in BINARY_EXTENSIONS


def split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def filter_files(files: list[str], file_extensions: str | None = None, file_excludes: str | None = None) -> list[str]:
    """Drop binaries, keep only listed extensions, then drop excluded basenames.

    Both filters are comma-separated strings; an empty filter is a no-op.
    Order of the input list is preserved.
    """
    selected = [f for f in files if not is_binary_file(f)]

    include = {ext.lower() for ext in split_list(file_extensions)}
    if include:
        selected = [f for f in selected if extension(f) in include]

    exclude = set(split_list(file_excludes))
    if exclude:
        selected = [f for f in selected if f.rsplit("/", 1)[-1].strip() not in exclude]

    return selected
