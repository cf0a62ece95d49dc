from pathlib import Path


ROOT_DIR = Path(__file__).parent.parent.parent


DATA_DIR = ROOT_DIR / "data"
LOGS_DIR = Path("logs")

# local store
DEFAULT_DB_PATH = DATA_DIR / "cinevault.db"
