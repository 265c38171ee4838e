from .summary import CATEGORY_COLORS, category_breakdown, filter_by_scope, source_files, summarize
from .export import CSV_HEADERS, export_filename, to_csv, to_csv_bytes
