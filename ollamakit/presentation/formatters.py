"""
Text formatting for CLI output: sizes, dates, model entries and error messages.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from ..domain.errors import (
    Cancelled,
    DecodingError,
    FileError,
    InvalidParameters,
    InvalidResponse,
    ModelNotFound,
    NetworkError,
    OllamaError,
    ServerError,
    UnexpectedStatusCode,
)
from ..domain.models import ModelInformation, ModelListEntry, RunningModelInfo

KB = 1024
MB = 1024 * KB
GB = 1024 * MB


def format_file_size(num_bytes: int) -> str:
    """Human-readable size with GB/MB/KB thresholds, plain bytes below 1 KB."""
    if num_bytes >= GB:
        return f"{num_bytes / GB:.2f} GB"
    if num_bytes >= MB:
        return f"{num_bytes / MB:.2f} MB"
    if num_bytes >= KB:
        return f"{num_bytes / KB:.2f} KB"
    return f"{num_bytes} bytes"


def format_bytes(num_bytes: int) -> str:
    """Size scaled through B..TB, always with two decimals."""
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(num_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(units) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.2f} {units[unit_index]}"


def format_relative(when: datetime, now: Optional[datetime] = None) -> str:
    """Coarse relative time: 'in 4 minutes', '2 hours ago', 'now'."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = int((when - now).total_seconds())
    magnitude = abs(seconds)
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60), ("second", 1)):
        if magnitude >= size:
            count = magnitude // size
            label = f"{count} {unit}{'' if count == 1 else 's'}"
            return f"in {label}" if seconds > 0 else f"{label} ago"
    return "now"


def format_expiry(when: datetime, now: Optional[datetime] = None) -> str:
    absolute = when.astimezone().strftime("%b %d, %Y %H:%M:%S")
    return f"{format_relative(when, now)} ({absolute})"


def format_model_entry(model: ModelListEntry) -> str:
    """Multi-line block for one entry of the `list` command."""
    modified = model.modified_at.astimezone().strftime("%b %d, %Y %H:%M")
    return (
        f"- {model.name}\n"
        f"  Size: {format_file_size(model.size)}\n"
        f"  Family: {model.details.family}\n"
        f"  Parameters: {model.details.parameter_size}\n"
        f"  Quantization: {model.details.quantization_level}\n"
        f"  Modified: {modified}\n"
    )


def format_running_model(model: RunningModelInfo, now: Optional[datetime] = None) -> str:
    details = model.details
    return "\n".join([
        f"- Model: {model.name}",
        f"  Full ID: {model.model}",
        f"  Size: {format_bytes(model.size)}",
        f"  VRAM Usage: {format_bytes(model.size_vram)}",
        f"  Expires: {format_expiry(model.expires_at, now)}",
        "  Details:",
        f"    Family: {details.family}",
        f"    Parameter Size: {details.parameter_size}",
        f"    Quantization: {details.quantization_level}",
        f"    Format: {details.format}",
        "",
    ])


def format_model_information(info: ModelInformation) -> str:
    details = info.details
    lines = [
        "Model Details:",
        "--------------",
        "Properties:",
        f"  Format: {details.format}",
        f"  Family: {details.family}",
    ]
    if details.families:
        lines.append(f"  All Families: {', '.join(details.families)}")
    lines.append(f"  Parameter Size: {details.parameter_size}")
    lines.append(f"  Quantization: {details.quantization_level}")
    return "\n".join(lines)


def describe_error(error: OllamaError, model_name: Optional[str] = None) -> str:
    """User-facing explanation for each error kind."""
    if isinstance(error, ModelNotFound):
        if model_name:
            return f"Model '{model_name}' not found. Please check the model name and try again."
        return "Model not found. Please check the model name and try again."
    if isinstance(error, ServerError):
        return f"Server error: {error.message}"
    if isinstance(error, NetworkError):
        return f"Network error: {error.underlying}"
    if isinstance(error, InvalidResponse):
        return "Invalid response from server"
    if isinstance(error, InvalidParameters):
        return f"Invalid parameters: {error.message}"
    if isinstance(error, DecodingError):
        return f"Error decoding response: {error.underlying}"
    if isinstance(error, UnexpectedStatusCode):
        return f"Unexpected status code: {error.status_code}"
    if isinstance(error, Cancelled):
        return "Cancelled"
    if isinstance(error, FileError):
        return f"File error: {error.message}"
    return str(error)
