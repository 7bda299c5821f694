from pathlib import Path
from dotenv import load_dotenv
import os
import pytz

load_dotenv(Path(__file__).parent.parent / '.env', override=True)

def env_bool(name: str, default: bool = False) -> bool:
    return str(os.getenv(name, str(default))).strip().lower() in {"1", "true", "yes", "on", "y", "t"}

class Settings:
    # Directories (created on first use, not at import)
    BASE_DIR = Path(os.getenv('BASE_DIR') or Path.cwd())
    STORAGE_DIR = BASE_DIR / "storage"

    # Downloads
    DOWNLOADS_DIR = STORAGE_DIR / "downloads"
    DOWNLOAD_TIMEOUT = float(os.getenv('DOWNLOAD_TIMEOUT', 30))

    # Logs
    LOGS_DIR = STORAGE_DIR / "logs"
    LOG_FILE = LOGS_DIR / "helperkit.log"
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_TO_FILE = env_bool("LOG_TO_FILE", True)

    # Timezone used as "local time" by the date helpers
    SERVER_TZ = pytz.timezone(os.getenv('SERVER_TZ')) if os.getenv('SERVER_TZ') else pytz.UTC
