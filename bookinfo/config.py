"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Files
    INPUT_FILE = os.getenv("INPUT_FILE", "assets/ISBN_Input_File.txt")
    OUTPUT_FILE = os.getenv("OUTPUT_FILE", "output/ISBN_Output_File.csv")

    # API
    OPENLIBRARY_URL = os.getenv("OPENLIBRARY_URL", "https://openlibrary.org/api/books")

    # Defaults
    DEFAULT_TIMEOUT = int(os.getenv("DEFAULT_TIMEOUT", "10"))

