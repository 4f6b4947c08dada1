import os
from dotenv import load_dotenv  # type:ignore

# Load the env
load_dotenv()

# Key used by the address helpers when none is passed explicitly.
# Either 32 hex digits or 16 raw characters, e.g. export IPCRYPT_KEY="<hex>"
IPCRYPT_KEY = os.getenv("IPCRYPT_KEY")

# Number of random pairs drawn by the differential measurement
IPCRYPT_DIFF_SAMPLES = int(os.getenv("IPCRYPT_DIFF_SAMPLES", 1_000_000))
