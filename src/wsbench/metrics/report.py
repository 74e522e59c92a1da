from __future__ import annotations

from wsbench.metrics.models import RunSummary, StreamStats

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(n: int | None) -> str:
    if n is None:
        return "n/a"
    value = float(n)
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS:
        if value < 1024 or unit == _BYTE_UNITS[-1]:
            break
        value /= 1024
    if unit == _BYTE_UNITS[0]:
        return f"{n} B"
    return f"{value:.2f} {unit}"


def format_duration(ms: float | None) -> str:
    if ms is None:
        return "n/a"
    if round(ms) < 1000:
        return f"{ms:.0f} ms"
    seconds = ms / 1000
    if round(seconds, 2) < 60:
        return f"{seconds:.2f} s"
    minutes, seconds = divmod(round(seconds), 60)
    return f"{minutes} min {seconds} s"


def format_summary(summary: RunSummary) -> dict[str, str]:
    return {
        "Total received": format_bytes(summary.bytes_received),
        "Total transferred": format_bytes(summary.bytes_transferred),
        "Time taken for tests": format_duration(summary.duration_ms),
        "Connections created": str(summary.connections),
        "Handshake duration (median)": format_duration(summary.handshake.median),
        "Message latency (median)": format_duration(summary.latency.median),
        "Total errors": str(summary.total_errors),
    }


def render(summary: RunSummary) -> str:
    lines: list[str] = []
    rows = {
        "Online": format_duration(summary.established_ms),
        **format_summary(summary),
        "Disconnected": str(summary.disconnects),
        "Failed": str(summary.failures),
    }
    width = max(len(label) for label in rows)
    for label, value in rows.items():
        lines.append(f"{label:<{width}}  {value}")

    if summary.errors:
        lines.append("")
        lines.append("Received errors:")
        for message, count in summary.errors.items():
            lines.append(f"{count:>8}x {message}")

    lines.append("")
    lines.extend(_render_stats(summary.handshake, summary.latency))
    return "\n".join(lines)


def _render_stats(handshake: StreamStats, latency: StreamStats) -> list[str]:
    header = f"{'':<8}{'Handshaking':>14}{'Latency':>14}"
    lines = [header]
    for label, attr in (("Min", "minimum"), ("Mean", "mean"), ("Stdev", "stddev"), ("Max", "maximum")):
        lines.append(
            f"{label:<8}"
            f"{format_duration(getattr(handshake, attr)):>14}"
            f"{format_duration(getattr(latency, attr)):>14}"
        )
    qs = sorted(set(handshake.percentiles) | set(latency.percentiles))
    for q in qs:
        lines.append(
            f"{f'{q:g}%':<8}"
            f"{format_duration(handshake.percentiles.get(q)):>14}"
            f"{format_duration(latency.percentiles.get(q)):>14}"
        )
    return lines
