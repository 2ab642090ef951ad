import os
from pathlib import Path

from .. import SOURCE_EXTENSIONS

IGNORE_FOLDERS = [
    "build",
    "out",
    "dist",
    "node_modules",
    "external",
    "cmake-build-debug",
    "cmake-build-release",
    ".git",
    ".vscode",
]

ROOT_FOLDER = "Root"


def find_source_files(root_dir, ignore_folders=None):
    """
    Collect C/C++ sources and headers below root_dir, sorted by path.

    Directories named in ignore_folders are not descended into.
    """
    ignored = set(IGNORE_FOLDERS if ignore_folders is None else ignore_folders)
    root_dir = Path(root_dir)
    source_files = []
    for dirpath, dirnames, filenames in os.walk(root_dir):
        dirnames[:] = [d for d in dirnames if d not in ignored]
        for filename in filenames:
            if filename.lower().endswith(SOURCE_EXTENSIONS):
                source_files.append(Path(dirpath) / filename)
    return sorted(source_files, key=lambda p: p.as_posix())


def relative_folder(file_path, root_dir):
    """Folder of file_path relative to root_dir as a POSIX path, "Root" for root_dir itself."""
    relative = Path(file_path).parent.relative_to(Path(root_dir)).as_posix()
    return ROOT_FOLDER if relative == "." else relative


def is_in_folders(folder, allowed_folders):
    return any(folder == allowed or folder.startswith(allowed.rstrip("/") + "/") for allowed in allowed_folders)


def get_project_folders(root_dir, ignore_folders=None):
    folders = {relative_folder(path, root_dir) for path in find_source_files(root_dir, ignore_folders)}
    return sorted(folders)
