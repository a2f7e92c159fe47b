"""Excel styling, formatting, and writing utilities."""
from .styles import *
from .formatters import NUMBER_FORMATS, write_cell, write_header, widen_columns, add_kpi_card
from .writer import ExcelWriter
