r"""
 Copyright 2023 GSI Technology, Inc.

 Permission is hereby granted, free of charge, to any person obtaining a copy of
 this software and associated documentation files (the “Software”), to deal in
 the Software without restriction, including without limitation the rights to
 use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of
 the Software, and to permit persons to whom the Software is furnished to do so,
 subject to the following conditions:

 The above copyright notice and this permission notice shall be included in all
 copies or substantial portions of the Software.

 THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
 IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS
 FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR
 COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER
 IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
 CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""

import inspect
import os
import sys
from pathlib import Path
from typing import Optional

PROJECT_NAME = "vu-asm"


def project_root(project_name: Optional[str] = None) -> Path:
    """Determine the project root by finding a directory, above the calling
    module, that contains the hidden file named .project-root. If
    `project_name` is given, the file must contain that name."""

    path = Path.cwd()
    for frame_info in inspect.stack():
        if frame_info.filename != __file__:
            path = Path(frame_info.filename).parent
            break

    while path != path.parent:
        project_root_file = path / ".project-root"
        if project_root_file.exists():
            if project_name is None:
                return path
            with open(project_root_file, "rt") as f:
                if project_name == f.read().strip():
                    return path
        path = path.parent

    return path


def path_wrt_root(file_path, project_name: Optional[str] = None) -> Path:
    """Resolve a path relative to the project root, falling back to the
    installed copy under `<prefix>/share/vu-asm`."""

    root_file_path = Path(project_root(project_name), file_path)

    if not root_file_path.exists():
        # <prefix>/lib/pythonX.Y/site-packages/vu_asm/utils
        this_dir = os.path.split(os.path.abspath(__file__))[0]
        prefix = this_dir + "/../../../../../"
        next_file_path = Path(prefix) / "share" / PROJECT_NAME / file_path
        if next_file_path.exists():
            root_file_path = next_file_path.resolve()
        else:
            next_file_path = Path(sys.prefix) / "share" / PROJECT_NAME / file_path
            if next_file_path.exists():
                root_file_path = next_file_path

    return root_file_path


def user_tmp() -> Path:
    if sys.platform == "linux":
        return Path(Path.home(), ".local", "share")
    elif sys.platform == "win32" or sys.platform == "cygwin":
        return Path(Path.home(), "AppData", "Roaming")
    elif sys.platform == "darwin":
        return Path(Path.home(), "Library", "Application Support")
    else:
        raise RuntimeError("Unsupported platform: " + sys.platform)
