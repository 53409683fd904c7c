from opencov.output.human import render_human
from opencov.output.json import render_json
from opencov.output.summary import FileSummary, sort_rows, summarize

__all__ = ["FileSummary", "render_human", "render_json", "sort_rows", "summarize"]
