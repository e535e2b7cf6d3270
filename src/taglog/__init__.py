"""
taglog: console logger with in-message level tags.

    log = Logger(DEBUG, template(Preset.SHORT_DEBUG))
    log.logf("[WARN] retrying %s in %ds", url, delay)

Lines go to stdout; ERROR and above are copied to stderr; PANIC/FATAL add a
stack dump and terminate (or run the configured fatal action).
"""

from taglog.core import Logger
from taglog.records import Level, LogRecord, CallerInfo
from taglog.classifier import classify
from taglog.caller import CallerResolver, FrameCallerResolver, resolve_caller
from taglog.formatters import Preset, Template, TemplateError, compile_template
from taglog.routing import Sink, StreamRouter, stack_dump
from taglog.adapters import L, Func, NoOp, NOOP, StdLogger
from taglog.instance import setup, default, printf
from taglog.config import LoggerConfig
from taglog.options import (
    Option,
    DEBUG,
    TRACE,
    MSEC,
    LEVEL_BRACES,
    CALLER_FILE,
    CALLER_FUNC,
    CALLER_PKG,
    level,
    template,
    out,
    err,
    caller_depth,
    caller_resolver,
    clock,
    fatal_action,
)

__all__ = [
    "Logger",
    "Level",
    "LogRecord",
    "CallerInfo",
    "classify",
    "CallerResolver",
    "FrameCallerResolver",
    "resolve_caller",
    "Preset",
    "Template",
    "TemplateError",
    "compile_template",
    "Sink",
    "StreamRouter",
    "stack_dump",
    "L",
    "Func",
    "NoOp",
    "NOOP",
    "StdLogger",
    "setup",
    "default",
    "printf",
    "LoggerConfig",
    "Option",
    "DEBUG",
    "TRACE",
    "MSEC",
    "LEVEL_BRACES",
    "CALLER_FILE",
    "CALLER_FUNC",
    "CALLER_PKG",
    "level",
    "template",
    "out",
    "err",
    "caller_depth",
    "caller_resolver",
    "clock",
    "fatal_action",
]
