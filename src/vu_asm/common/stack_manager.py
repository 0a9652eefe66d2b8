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

import threading
from collections import deque
from typing import Any, ClassVar, Deque, Dict, Optional, Type

Options = Dict[str, Any]


class ConfigStack:
    """Thread-local stack of assembler options. The innermost (most recently
    pushed) options win; nothing survives the scope that pushed it."""

    THREAD_LOCAL: ClassVar = threading.local()

    @classmethod
    def stack(cls: Type["ConfigStack"]) -> Deque[Options]:
        thread_locals = cls.THREAD_LOCAL
        if not hasattr(thread_locals, "configs"):
            thread_locals.configs = deque()
        return thread_locals.configs

    @classmethod
    def push(cls: Type["ConfigStack"], config: Options) -> Options:
        cls.stack().append(config)
        return config

    @classmethod
    def pop(cls: Type["ConfigStack"]) -> Options:
        configs = cls.stack()
        if len(configs) == 0:
            raise AssertionError("Config stack is empty!")
        return configs.pop()

    @classmethod
    def peek(cls: Type["ConfigStack"]) -> Optional[Options]:
        configs = cls.stack()
        if len(configs) == 0:
            return None
        return configs[-1]

    @classmethod
    def depth(cls: Type["ConfigStack"]) -> int:
        return len(cls.stack())
