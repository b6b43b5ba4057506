import os
from pathlib import Path
from dotenv import load_dotenv

# The .env file sits next to the package root (license_curator/.env)
env_path = Path(__file__).resolve().parent.parent / '.env'

load_dotenv(dotenv_path=env_path)

# logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# harvest tool whose output the harvest strategies read
HARVEST_TOOL = os.getenv("HARVEST_TOOL", "clearlydefined")

# NuGet licenseUrl values that never count as matching evidence
NUGET_EXCLUDED_LICENSE_URLS = [
    url.strip()
    for url in os.getenv("NUGET_EXCLUDED_LICENSE_URLS", "github.com,aka.ms/deprecateLicenseUrl").split(",")
    if url.strip()
]

# optional override of the bundled SPDX license table
SPDX_LICENSES_PATH = os.getenv("SPDX_LICENSES_PATH")
