"""
Marketplace export layer: translation tables, per-marketplace schemas,
the schema registry and CSV serialization.

Usage:
    from mrlister.exporters import SchemaRegistry, render_csv

    schema = SchemaRegistry.default().resolve("Etsy")
    text = render_csv(schema.headers, [schema.map_row(item) for item in items])
"""

from mrlister.exporters.base_schema import BaseExportSchema, export_filename
from mrlister.exporters.csv_writer import escape_value, parse_csv, render_csv, unescape_value
from mrlister.exporters.registry import SchemaRegistry

__all__ = [
    "BaseExportSchema",
    "SchemaRegistry",
    "escape_value",
    "export_filename",
    "parse_csv",
    "render_csv",
    "unescape_value",
]
