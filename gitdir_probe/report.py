import os
from html import escape

from openpyxl import Workbook

HTML_HEADER = """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>Exposed .git Directories</title>
  <style>
    body { font-family: Arial, sans-serif; background: #0f1220; color: #e6e8ef; }
    .row { display: flex; gap: 16px; align-items: center; padding: 10px; border-bottom: 1px solid #2a2f55; }
    .domain { width: 320px; font-weight: 600; }
    img { max-width: 420px; border-radius: 6px; box-shadow: 0 6px 16px rgba(0,0,0,.35); }
  </style>
</head>
<body>
  <h1>Exposed .git Directories</h1>
"""
HTML_FOOTER = "</body></html>\n"


def write_report(records, html_path, xlsx_path):
    """HTML gallery plus an Excel sheet of the screenshot records."""
    html_dir = os.path.dirname(os.path.abspath(html_path))

    with open(html_path, "w", encoding="utf-8") as out:
        out.write(HTML_HEADER)
        for rec in records:
            src = os.path.relpath(os.path.abspath(rec.image_path), html_dir)
            git_url = f"{rec.domain}/.git/"
            out.write('<div class="row">')
            out.write(f'<div class="domain">{escape(rec.domain)}</div>')
            out.write(f'<a href="{escape(git_url)}" target="_blank"><img src="{escape(src)}"></a>')
            out.write('</div>\n')
        out.write(HTML_FOOTER)

    wb = Workbook()
    ws = wb.active
    ws.title = "Results"
    ws.append(["Domain", "Screenshot_Path"])
    for rec in records:
        ws.append([rec.domain, rec.image_path])
    wb.save(xlsx_path)
