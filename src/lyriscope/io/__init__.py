"""Export and encoding."""

from lyriscope.io.encoder import encode_video
from lyriscope.io.exporter import export_filename, format_export, write_export

__all__ = ["encode_video", "export_filename", "format_export", "write_export"]
