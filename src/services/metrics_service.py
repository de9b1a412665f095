from __future__ import annotations

from collections.abc import Iterable, Mapping
import importlib
import logging
import os
import resource
import sys

from core.exceptions import StorageError
from core.metrics import get_request_counter, process_uptime

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
STATM_PATH = "/proc/self/statm"

Sample = tuple[Mapping[str, str], float | int]


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _format_labels(labels: Mapping[str, str]) -> str:
    if not labels:
        return ""
    pairs = ",".join(f'{key}="{_escape_label_value(str(value))}"' for key, value in labels.items())
    return "{" + pairs + "}"


def render_metric(name: str, help_text: str, metric_type: str, samples: Iterable[Sample]) -> list[str]:
    lines = [f"# HELP {name} {help_text}", f"# TYPE {name} {metric_type}"]
    lines.extend(f"{name}{_format_labels(labels)} {value}" for labels, value in samples)
    return lines


def read_memory_usage() -> dict[str, int]:
    """Memory of this process in bytes: resident set, virtual size and heap (data segment)."""
    try:
        with open(STATM_PATH) as fh:
            fields = [int(v) for v in fh.read().split()]
        vms_pages, rss_pages, data_pages = fields[0], fields[1], fields[5]
        page_size = os.sysconf("SC_PAGE_SIZE")
        return {"rss": rss_pages * page_size, "vms": vms_pages * page_size, "heap": data_pages * page_size}
    except (OSError, ValueError, IndexError):
        # ru_maxrss is peak RSS: kilobytes on Linux, bytes on macOS
        peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        return {"rss": peak if sys.platform == "darwin" else peak * 1024}


async def render_metrics() -> str:
    lines: list[str] = []

    lines += render_metric(
        "process_uptime_seconds",
        "Process uptime in seconds",
        "counter",
        [({}, round(process_uptime(), 3))],
    )

    memory = read_memory_usage()
    lines += render_metric(
        "process_memory_usage_bytes",
        "Process memory usage in bytes (rss=resident set, vms=virtual size, heap=data segment)",
        "gauge",
        [({"type": kind}, value) for kind, value in memory.items()],
    )
    lines += render_metric(
        "python_allocated_blocks",
        "Number of memory blocks currently allocated by the interpreter (a count, not bytes)",
        "gauge",
        [({}, sys.getallocatedblocks())],
    )

    repo = importlib.import_module("db.repositories.post_repository")
    try:
        post_count = await repo.count_posts()
    except StorageError as e:
        logger.error("Error fetching database metrics: %s", e.__cause__ or e)
    else:
        lines += render_metric("blog_posts_total", "Total number of blog posts", "gauge", [({}, post_count)])

    counts = get_request_counter().snapshot() or {("GET", "200"): 0}
    lines += render_metric(
        "http_requests_total",
        "Total number of HTTP requests",
        "counter",
        [({"method": method, "status": status}, value) for (method, status), value in sorted(counts.items())],
    )

    return "\n".join(lines) + "\n"
