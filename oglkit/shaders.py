"""Shader stage names, shader source loading and diagnostic formatting.

The enumerations carry the numeric codes used by the OpenGL API, so values
received from a driver callback can be passed straight in.
"""

from __future__ import annotations

import enum
from os import PathLike

# Driver message ids that carry no useful information.
IGNORED_DEBUG_IDS = frozenset({131169, 131185, 131218, 131204})

_SEPARATOR = "---------------"
_LOG_FOOTER = "\n -- --------------------------------------------------- -- "
PROGRAM_KIND = "PROGRAM"


class ShaderError(Exception):
    """Raised when a shader cannot be identified, read, compiled or linked."""


class ShaderType(enum.IntEnum):
    """Shader stages, valued by their OpenGL codes."""

    VERTEX = 0x8B31
    FRAGMENT = 0x8B30
    TESS_CONTROL = 0x8E88
    TESS_EVALUATION = 0x8E87
    GEOMETRY = 0x8DD9
    COMPUTE = 0x91B9

    @property
    def label(self) -> str:
        """Short upper-case name used in diagnostics."""
        return _SHADER_LABELS[self]


_SHADER_LABELS = {
    ShaderType.VERTEX: "VERTEX",
    ShaderType.FRAGMENT: "FRAGMENT",
    ShaderType.TESS_CONTROL: "TCONTROL",
    ShaderType.TESS_EVALUATION: "TEVAL",
    ShaderType.GEOMETRY: "GEOMETRY",
    ShaderType.COMPUTE: "COMPUTE",
}


class DebugSource(enum.IntEnum):
    """Origin of a driver debug message."""

    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B

    @property
    def label(self) -> str:
        return _SOURCE_LABELS[self]


_SOURCE_LABELS = {
    DebugSource.API: "API",
    DebugSource.WINDOW_SYSTEM: "Window System",
    DebugSource.SHADER_COMPILER: "Shader Compiler",
    DebugSource.THIRD_PARTY: "Third Party",
    DebugSource.APPLICATION: "Application",
    DebugSource.OTHER: "Other",
}


class DebugType(enum.IntEnum):
    """Kind of a driver debug message."""

    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268
    PUSH_GROUP = 0x8269
    POP_GROUP = 0x826A

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    DebugType.ERROR: "Error",
    DebugType.DEPRECATED_BEHAVIOR: "Deprecated Behaviour",
    DebugType.UNDEFINED_BEHAVIOR: "Undefined Behaviour",
    DebugType.PORTABILITY: "Portability",
    DebugType.PERFORMANCE: "Performance",
    DebugType.MARKER: "Marker",
    DebugType.PUSH_GROUP: "Push Group",
    DebugType.POP_GROUP: "Pop Group",
    DebugType.OTHER: "Other",
}


class DebugSeverity(enum.IntEnum):
    """Severity of a driver debug message."""

    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B

    @property
    def label(self) -> str:
        return _SEVERITY_LABELS[self]


_SEVERITY_LABELS = {
    DebugSeverity.HIGH: "high",
    DebugSeverity.MEDIUM: "medium",
    DebugSeverity.LOW: "low",
    DebugSeverity.NOTIFICATION: "notification",
}


def _as_shader_type(shader_type: int) -> ShaderType:
    try:
        return ShaderType(shader_type)
    except ValueError:
        raise ShaderError(f"BAD shader type: {shader_type}") from None


def shader_type_name(shader_type: int) -> str:
    """Diagnostic name of a shader stage; unknown stages raise ``ShaderError``."""
    return _as_shader_type(shader_type).label


def load_shader_source(shader_type: int, path: str | PathLike) -> str:
    """Read the source code of a shader of the given stage from ``path``."""
    _as_shader_type(shader_type)
    try:
        with open(path, encoding="utf-8") as file:
            return file.read()
    except OSError as exc:
        raise ShaderError(f"Impossible to read: {path}\n{exc}") from exc


def format_compile_error(kind: str, filename: str, log: str) -> str:
    """Report text for a failed compilation, or linking when ``kind`` is PROGRAM."""
    if kind == PROGRAM_KIND:
        header = f"ERROR::PROGRAM_LINKING_ERROR of type: {kind}\n"
    else:
        header = f"ERROR::SHADER_COMPILATION_ERROR of type: {kind}\n"
    location = f"Filename: {filename}\n" if filename else ""
    return f"{header}{location}{log}{_LOG_FOOTER}"


def _label(enum_cls: type[enum.IntEnum], value: int, prefix: str) -> str:
    try:
        return f"{prefix}: {enum_cls(value).label}"
    except ValueError:
        return ""


def format_debug_message(
    source: int, type_: int, message_id: int, severity: int, message: str
) -> str | None:
    """Readable report of a driver debug message, or ``None`` for ignored ids."""
    if message_id in IGNORED_DEBUG_IDS:
        return None
    lines = [
        _SEPARATOR,
        f"Debug message ({message_id}): {message}",
        _label(DebugSource, source, "Source"),
        _label(DebugType, type_, "Type"),
        _label(DebugSeverity, severity, "Severity"),
        "",
    ]
    return "\n".join(lines) + "\n"