# --- Intake ---
IMAGE_EXTENSIONS = ["*.jpg", "*.jpeg", "*.JPG", "*.JPEG", "*.png", "*.PNG", "*.heic", "*.HEIC", "*.heif", "*.HEIF"]

# --- EXIF ---
EXIF_GPS_INFO_TAG = 34853
EXIF_DATETIME_ORIGINAL_TAG = 36867
EXIF_DATETIME_TAG = 306

# GPS IFD ids
GPS_LATITUDE_REF = 1
GPS_LATITUDE = 2
GPS_LONGITUDE_REF = 3
GPS_LONGITUDE = 4

# --- Excel report ---
EXCEL_HEADERS = {
    "B1": "Nº",
    "C1": "File",
    "D1": "Description",
    "E1": "Date",
    "F1": "Latitude",
    "G1": "Longitude",
}

COLUMN_WIDTHS = {"A": 3, "B": 8, "C": 30, "D": 50, "E": 22, "F": 15, "G": 15}

DEFAULT_PROJECT_NAME = "creeper_report"
