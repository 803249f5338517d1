from pathlib import Path


BASE_DIR = Path(__file__).resolve().parents[3]

LOG_DIR = BASE_DIR / 'logs'

# Local overrides win over the committed defaults
ENV_FILE = BASE_DIR / '.env' if (BASE_DIR / '.env').exists() else BASE_DIR / '.env.example'
