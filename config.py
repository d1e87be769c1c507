import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Data file settings
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "LibraryManagement.csv")
    data_encoding: str = os.getenv("LIBRARY_DATA_ENCODING", "utf-8")

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # CLI settings
    # Allowed values: 'plain', 'json', 'rich'
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Management System")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")


settings = Settings()
