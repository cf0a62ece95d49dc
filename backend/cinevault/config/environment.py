from pathlib import Path
import os
from dotenv import load_dotenv

from cinevault.config.paths import DEFAULT_DB_PATH

env_path = Path(__file__).resolve().parent.parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

# the metadata client raises if it is constructed without a key
OMDB_API_KEY = os.getenv('OMDB_API_KEY')
OMDB_BASE_URL = os.getenv('OMDB_BASE_URL', 'https://www.omdbapi.com/')

DATABASE_URL = os.getenv('DATABASE_URL', f"sqlite:///{DEFAULT_DB_PATH}")

STORAGE_KEY = os.getenv('STORAGE_KEY', 'cinevault_collection')
if not STORAGE_KEY:
    raise ValueError("STORAGE_KEY must not be empty")

DEFAULT_USER_NAME = os.getenv('DEFAULT_USER_NAME', 'Movie Lover')
