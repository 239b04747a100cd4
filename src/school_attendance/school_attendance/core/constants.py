"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DEFAULT_COLUMN_WIDTH = 15

HEADER_FILL_COLOR = "FF404040"
HEADER_FONT_COLOR = "FFFFFFFF"
HEADER_BORDER_COLOR = "FF000000"
BAND_FILL_EVEN = "FFF5F5F5"
BAND_FILL_ODD = "FFFFFFFF"
DATA_BORDER_COLOR = "FFD3D3D3"

PERCENTAGE_NUMBER_FORMAT = "0.0%"

# Bounds for month-based report requests.
MIN_REPORT_YEAR = 1900
MAX_REPORT_YEAR = 9999
MAX_REPORT_MONTHS = 60

DETAIL_SHEET_TITLE = "Detail Absensi"
SUMMARY_SHEET_TITLE = "Rekapitulasi"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
