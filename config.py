import os

# ---------------- PATHS ----------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

CSV_FILE = os.getenv("LOAN_CSV_FILE", os.path.join(BASE_DIR, "data", "loan_applications.csv"))
MODEL_DIR = os.getenv("LOAN_MODEL_DIR", os.path.join(BASE_DIR, "ml_model"))

TREE_FILENAME = "tree.joblib"
META_FILENAME = "meta.json"

# ---------------- COLUMNS ----------------
# Exactly these 3, in this order
FEATURE_COLUMNS = ["Credit_Score", "Income", "Loan_Amount(s)"]
TARGET_COLUMN = "Loan_Approved"

# ---------------- TREE ----------------
MAX_DEPTH = 10
MIN_SAMPLES_SPLIT = 2

# ---------------- SERVER ----------------
PORT = int(os.getenv("PORT", "3000"))
DEBUG = os.getenv("FLASK_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
