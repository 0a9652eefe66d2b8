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

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from vu_asm.codegen.template_extensions import TemplateExtensions
from vu_asm.common.types import Word
from vu_asm.utils.path_utils import path_wrt_root


class TemplateAccessor(Environment):

    def __init__(self: "TemplateAccessor",
                 templates_path: Path,
                 *args: Sequence[Any],
                 **kwargs: Dict[str, Any]) -> None:
        opts = {
            "loader": FileSystemLoader(templates_path),
            "keep_trailing_newline": True,
            "undefined": StrictUndefined,
            "extensions": [TemplateExtensions],
        }
        opts.update(kwargs)
        super().__init__(*args, **opts)

    def emit(self: "TemplateAccessor", template_path: str, **kwargs) -> str:
        template = self.get_template(template_path)
        return template.render(**kwargs)


class VUTemplateAccessor(TemplateAccessor):
    """Renders assembled programs as source for the host build. The
    delimiters are chosen so they never collide with C or Rust braces."""

    def __init__(self: "VUTemplateAccessor",
                 *args: Sequence[Any],
                 templates_path: Path = path_wrt_root("templates/vu"),
                 **kwargs: Dict[str, Any]) -> None:
        env_opts = {
            "block_start_string": "%{",
            "block_end_string": "}%",
            "variable_start_string": "${",
            "variable_end_string": "}$",
            "comment_start_string": "#{",
            "comment_end_string": "}#",
            "line_statement_prefix": "##",
            "line_comment_prefix": "###",
            "trim_blocks": True,
            "lstrip_blocks": True,
        }
        env_opts.update(kwargs)
        super().__init__(templates_path, *args, **env_opts)

    def emit_c_array(self: "VUTemplateAccessor",
                     name: str,
                     words: Sequence[Word],
                     source_name: Optional[str] = None) -> str:
        return self.emit("c_array.jinja",
                         name=name,
                         words=words,
                         source_name=source_name)

    def emit_rust_array(self: "VUTemplateAccessor",
                        name: str,
                        words: Sequence[Word],
                        source_name: Optional[str] = None) -> str:
        return self.emit("rust_array.jinja",
                         name=name,
                         words=words,
                         source_name=source_name)

    def emit_hex_image(self: "VUTemplateAccessor",
                       words: Sequence[Word],
                       source_name: Optional[str] = None) -> str:
        return self.emit("hex_image.jinja",
                         words=words,
                         source_name=source_name)
