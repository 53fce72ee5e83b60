"""Report builder — text and JSON output for `ppm-tool info`."""

import json
import os
from typing import Any

import numpy as np

from ppm_tool.core.grid import PixelGrid
from ppm_tool.core.types import InfoReport


def _rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'#{r:02x}{g:02x}{b:02x}'


def colour_census(grid: PixelGrid, top: int = 5) -> list[dict[str, Any]]:
    """Most frequent colours in the grid, most common first."""
    pixels = grid.raw_pixels()
    if len(pixels) == 0:
        return []
    unique, counts = np.unique(pixels, axis=0, return_counts=True)
    # stable sort keeps ties in ascending RGB order
    order = np.argsort(-counts, kind='stable')[:top]
    total = int(counts.sum())
    result = []
    for i in order:
        r, g, b = (int(c) for c in unique[i])
        result.append(
            {
                'hex': _rgb_to_hex(r, g, b),
                'rgb': [r, g, b],
                'count': int(counts[i]),
                'pct': round(int(counts[i]) / total * 100, 1),
            }
        )
    return result


def format_text(report: InfoReport) -> str:
    """Format report as human-readable text."""
    lines = [f'ppm-tool: {os.path.basename(report.image_path)} ({report.width}×{report.height})', '']
    lines.append(f'  colour depth: {report.color_depth}')
    lines.append(f'  pixels:       {report.pixel_count}')
    lines.append(f'  file size:    {report.file_size} bytes (header {report.header_size})')
    lines.append(f'  body:         {report.body_size}/{report.expected_body} bytes')
    if report.truncated:
        lines.append(f'  truncated:    {report.decoded_pixels}/{report.pixel_count} pixels decoded, rest black')
    if report.census:
        lines.append('')
        lines.append('── census')
        for c in report.census:
            lines.append(f'  {c["hex"]}  {c["pct"]:5.1f}%  ({c["count"]})')
    return '\n'.join(lines)


def format_json(report: InfoReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.width, 'height': report.height},
        'color_depth': report.color_depth,
        'file_size': report.file_size,
        'header_size': report.header_size,
        'body': {
            'size': report.body_size,
            'expected': report.expected_body,
            'decoded_pixels': report.decoded_pixels,
            'truncated': report.truncated,
        },
        'census': report.census,
    }
    return json.dumps(obj, indent=2)
