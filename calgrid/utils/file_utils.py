"""File I/O utility functions for calgrid."""
import os
import csv
import sys
import markdown


def write_csv(filename: str, headers: list, rows: list) -> str:
    """Write data to a CSV file.

    Args:
        filename: Output file name
        headers: Column headers
        rows: Data rows

    Returns:
        The file name written
    """
    with open(filename, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        writer.writerows(rows)
    return filename


def write_markdown(md_path: str, content: str, title: str, overwrite: bool = False):
    """Add a rendered calendar to a Markdown file.

    The content must render to at least one HTML table, otherwise nothing
    is written. A new, empty or overwritten file starts with a
    "# Calendar <title>" heading; an existing one is appended to.

    Args:
        md_path: Output file path
        content: Markdown content holding the grid table
        title: Heading text (e.g. "February 2024")
        overwrite: Whether to replace the file if it exists
    """
    if "<table>" not in markdown.markdown(content, extensions=['tables']):
        print(f"[ERROR] Calendar '{title}' does not render as a Markdown table, not writing '{md_path}'")
        sys.exit(3)

    append = not overwrite and os.path.exists(md_path) and os.path.getsize(md_path) > 0
    if append:
        print(f"[INFO] File '{md_path}' exists. Appending output.")
    try:
        with open(md_path, 'a' if append else 'w', encoding='utf-8') as f:
            if not append:
                f.write(f"# Calendar {title}\n\n")
            f.write(content)
    except OSError as e:
        print(f"[ERROR] Failed to write to '{md_path}': {e}")
        sys.exit(2)
