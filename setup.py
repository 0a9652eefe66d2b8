import re
from pathlib import Path
from re import Pattern
from typing import List, Tuple, Union

from setuptools import setup

DataFiles = List[Tuple[str, List[str]]]


def recursively_collect_data_files(
        directory: Union[str, Path],
        pattern: Union[str, Pattern]) -> DataFiles:

    if isinstance(directory, str):
        directory = Path(directory)

    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    global_data_files = []
    local_data_files = []
    for candidate in sorted(directory.iterdir()):
        if candidate.is_dir():
            global_data_files += recursively_collect_data_files(candidate, pattern)
        elif pattern.fullmatch(candidate.name):
            local_data_files.append(str(candidate))

    if len(local_data_files) > 0:
        # installed to <prefix>/share/vu-asm/templates/... for path_wrt_root
        global_data_files.append((f"share/vu-asm/{directory}", local_data_files))

    return global_data_files


setup(
    data_files=recursively_collect_data_files("templates", r".*\.jinja"),
)
