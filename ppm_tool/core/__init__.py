"""ppm_tool.core — Foundation layer.

Contains the colour type, error taxonomy, pixel grid, P6 codec, Pillow bridge,
.env loading and the info report builder.
This module has NO dependencies on ppm_tool.commands or ppm_tool.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
