from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import logging

import config
from errors import ModelError
from model_store import ModelStore
from predict import predict_record
from train_model import train_from_csv

# ---------------- CONFIG ----------------
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": "*"}})

app.config["CSV_FILE"] = config.CSV_FILE
app.config["MODEL_DIR"] = config.MODEL_DIR


def model_store():
    return ModelStore(app.config["MODEL_DIR"])


# ---------------- ERRORS ----------------
@app.errorhandler(ModelError)
def handle_model_error(err):
    if err.status_code >= 500:
        log.error("%s: %s", type(err).__name__, err)
    else:
        log.warning("%s: %s", type(err).__name__, err)
    return jsonify({"ok": False, "error": str(err)}), err.status_code


@app.errorhandler(Exception)
def handle_unexpected_error(err):
    # 404/405 and friends keep their own responses
    if isinstance(err, HTTPException):
        return err
    log.exception("Unhandled error")
    return jsonify({"ok": False, "error": str(err)}), 500


# ---------------- HOME ----------------
@app.route("/")
def home():
    return f"Loan Decision Tree API 🚀 (Features: {', '.join(config.FEATURE_COLUMNS)})"


@app.route("/health")
def health():
    return jsonify({"ok": True, "trained": model_store().exists()})


# ---------------- TRAIN ----------------
@app.route("/train", methods=["POST"])
def train():
    summary = train_from_csv(app.config["CSV_FILE"], model_store())
    return jsonify(summary)


# ---------------- PREDICT ----------------
# Body: { "record": { "Credit_Score": 720, "Income": 55000, "Loan_Amount(s)": 20000 } }
@app.route("/predict", methods=["POST"])
def predict():
    data = request.get_json(silent=True) or {}
    record = data.get("record") if isinstance(data, dict) else None

    result = predict_record(record or {}, model_store())
    return jsonify(result)


# ---------------- RUN ----------------
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT, debug=config.DEBUG)
