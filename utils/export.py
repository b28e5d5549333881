"""Excel and CSV export of result tables."""

from io import BytesIO

import pandas as pd

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Excel caps sheet names at 31 characters
MAX_SHEET_NAME = 31


def to_csv_bytes(df, index=False):
    return df.to_csv(index=index).encode("utf-8")


def to_excel_bytes(sheets):
    """
    Write several DataFrames to one workbook.

    Args:
        sheets: mapping of sheet name -> DataFrame

    Returns:
        xlsx file contents
    """
    if not sheets:
        raise ValueError("At least one sheet is required")

    bio = BytesIO()
    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        workbook = writer.book
        header_format = workbook.add_format({
            'bold': True,
            'bg_color': '#D9E1F2',
            'border': 1
        })
        for name, df in sheets.items():
            sheet_name = name[:MAX_SHEET_NAME]
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            worksheet = writer.sheets[sheet_name]
            for col_idx, col in enumerate(df.columns):
                worksheet.write(0, col_idx, str(col), header_format)
                width = max(len(str(col)), 12)
                worksheet.set_column(col_idx, col_idx, width)
    bio.seek(0)
    return bio.read()
