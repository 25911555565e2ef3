"""Built-in sales dataset shown before the first upload."""

SAMPLE_SOURCE_NAME = "sample_sales"

SAMPLE_RECORDS = [
    {"year": 2000, "sales_us": 100, "sales_eu": 80, "profit": 20},
    {"year": 2001, "sales_us": 120, "sales_eu": 90, "profit": 25},
    {"year": 2002, "sales_us": 150, "sales_eu": 110, "profit": 30},
    {"year": 2003, "sales_us": 130, "sales_eu": 95, "profit": 22},
    {"year": 2004, "sales_us": 160, "sales_eu": 120, "profit": 35},
]
