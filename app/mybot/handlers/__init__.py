# -*- coding: utf-8 -*-

from .error_handler import handle_error, handle_loop_exception
from .translate_command import (
    build_translate_handler,
    translate_command,
    register_translate_commands,
)

__all__ = [
    "handle_error",
    "handle_loop_exception",
    "build_translate_handler",
    "translate_command",
    "register_translate_commands",
]
