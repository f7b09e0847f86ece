# src/creeper/exceptions.py


class CreeperError(Exception):
    """Base class for every error raised by this application."""

    pass


class InputFolderMissingError(CreeperError):
    """Raised when the input folder does not exist."""

    def __init__(self, path):
        super().__init__(f"Input folder does not exist: {path}")


class NoImagesFoundError(CreeperError):
    """Raised when the folder holds no supported images."""

    def __init__(self, path):
        super().__init__(f"No images (JPG/PNG/HEIC) found in: {path}")


class NoGPSDataError(CreeperError):
    """Raised when none of the scanned images carries a GPS location."""

    def __init__(self, total_scanned=0, folder_path=""):
        self.total_scanned = total_scanned
        self.folder_path = folder_path
        msg = (
            f"No valid GPS data found in the {total_scanned} "
            f"images scanned in {folder_path}. Check that location tagging was enabled on the camera."
        )
        super().__init__(msg)


class ProcessCancelledError(CreeperError):
    """Raised when the user stops the process."""

    def __init__(self):
        super().__init__("The process was cancelled by the user.")
