from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from flask_pymongo import PyMongo
from werkzeug.exceptions import HTTPException
from datetime import datetime, timezone
from dotenv import load_dotenv
import os
import logging
import traceback

from moodjournal.errors import EntryNotFound, ValidationError
from moodjournal.insights import TIME_RANGES, insight_message
from moodjournal.journal import JournalService, validate_entry_input
from moodjournal.store import EntryStore

"""
Endpoints:
GET    /api/prompt          // Next writing prompt
POST   /api/entries         // Create a journal entry (scored and tagged)
GET    /api/entries         // List entries, with search / theme and time range filters / sort
GET    /api/entries/<id>    // One entry
PUT    /api/entries/<id>    // Edit an entry, re-scored and re-tagged
DELETE /api/entries/<id>    // Delete an entry
DELETE /api/entries         // Clear all journal data
GET    /api/insights        // Rolling insights + weekly reflection text
GET    /api/reflect         // A past entry to re-read, with a reflection prompt
GET    /api/metrics         // Dashboard metrics over the last N days
POST   /api/analyze         // Score and tag text without saving it
GET    /api/export          // Backup document
POST   /api/import          // Restore from a backup document
"""


# Read environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

mongo = PyMongo()
api = Blueprint("api", __name__)

MAX_METRIC_DAYS = 365


class Config:
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    MONGO_URI = os.getenv('MONGODB_URI', 'mongodb://localhost:27017/moodjournal')
    SECRET_KEY = os.getenv('SECRET_KEY', 'change-me')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB max payload


def create_app(config=None, store=None):
    """Build the Flask app. ``store`` replaces the MongoDB-backed store (tests)."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)
    CORS(app)

    if store is None:
        mongo.init_app(app)
        store = EntryStore.from_database(mongo.db)
    app.extensions["journal"] = JournalService(store)

    app.register_blueprint(api)
    register_error_handlers(app)
    return app


def setup_database(app):
    try:
        app.extensions["journal"].store.setup_indexes()
        logger.info("Database indexes created successfully")
        return True
    except Exception as e:
        logger.error(f"Error setting up database: {str(e)}")
        return False


def _journal() -> JournalService:
    return current_app.extensions["journal"]


# Error Handlers
def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def validation_failed(error):
        return jsonify({"error": "Validation failed", "details": error.errors}), 400

    @app.errorhandler(EntryNotFound)
    def entry_not_found(error):
        return jsonify({"error": "Not Found", "message": str(error)}), 404

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.name, "message": error.description}), error.code
        logger.error(f"Internal server error: {error}")
        logger.error(traceback.format_exc())
        return jsonify({"error": "Internal Server Error"}), 500


# Health Check
@api.route('/healthz')
def health():
    try:
        _journal().store.entries.estimated_document_count()
        return jsonify({
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected",
            "version": "1.0.0"
        })
    except Exception as e:
        return jsonify({
            "status": "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error": str(e)
        }), 503


@api.route("/api/prompt", methods=["GET"])
def get_prompt():
    return jsonify({
        "prompt": _journal().current_prompt(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }), 200


@api.route("/api/entries", methods=["POST"])
def create_entry():
    data = request.get_json(silent=True) or {}

    errors, clean_data = validate_entry_input(data)
    if errors:
        raise ValidationError(errors)

    journal = _journal()
    entry = journal.add_entry(
        clean_data["content"],
        ai_prompt=clean_data["aiPrompt"],
        writing_time=clean_data["writingTime"],
    )
    return jsonify({
        "success": True,
        "entry": entry,
        "nextPrompt": journal.current_prompt(),
        "message": "Entry created successfully"
    }), 201


@api.route("/api/entries", methods=["GET"])
def get_entries():
    time_range = request.args.get("range", "all")
    if time_range != "all" and time_range not in TIME_RANGES:
        raise ValidationError(f"range must be one of: all, {', '.join(TIME_RANGES)}.")

    items = _journal().list_entries(
        query=request.args.get("q"),
        theme=request.args.get("theme"),
        sort_by=request.args.get("sortBy", "date"),
        time_range=time_range,
    )
    return jsonify({
        "success": True,
        "entries": items,
        "count": len(items)
    }), 200


@api.route("/api/entries", methods=["DELETE"])
def clear_entries():
    _journal().clear_all()
    return jsonify({"success": True, "message": "All journal data cleared"}), 200


@api.route("/api/entries/<entry_id>", methods=["GET"])
def get_entry(entry_id):
    return jsonify({"success": True, "entry": _journal().get_entry(entry_id)}), 200


@api.route("/api/entries/<entry_id>", methods=["PUT"])
def update_entry(entry_id):
    data = request.get_json(silent=True) or {}

    errors, clean_data = validate_entry_input(data)
    if errors:
        raise ValidationError(errors)

    entry = _journal().update_entry(entry_id, clean_data["content"])
    return jsonify({"success": True, "entry": entry}), 200


@api.route("/api/entries/<entry_id>", methods=["DELETE"])
def delete_entry(entry_id):
    _journal().delete_entry(entry_id)
    return jsonify({"success": True, "message": "Entry deleted"}), 200


@api.route("/api/insights", methods=["GET"])
def get_insights():
    journal = _journal()
    return jsonify({
        "success": True,
        "insights": journal.insights(),
        "reflection": journal.reflection()
    }), 200


# Reflection endpoint
@api.route("/api/reflect", methods=["GET"])
def get_reflection():
    reflection = _journal().reflect()
    if reflection["entry"] is None:
        return jsonify({
            "success": True,
            "entry": None,
            "message": "No entries old enough for reflection yet."
        }), 200
    return jsonify({"success": True, **reflection}), 200


@api.route("/api/metrics", methods=["GET"])
def get_metrics():
    try:
        days = int(request.args.get("days", 7))
    except ValueError:
        raise ValidationError("days must be an integer.")
    if not 1 <= days <= MAX_METRIC_DAYS:
        raise ValidationError(f"days must be between 1 and {MAX_METRIC_DAYS}.")

    metrics = _journal().metrics(days=days)
    return jsonify({
        "success": True,
        "days": days,
        "metrics": metrics,
        "message": insight_message(metrics)
    }), 200


@api.route("/api/analyze", methods=["POST"])
def analyze_text():
    data = request.get_json(silent=True) or {}
    text = data.get("text") if isinstance(data, dict) else None
    if not isinstance(text, str):
        raise ValidationError("text is required.")
    return jsonify({"success": True, **_journal().analyze(text)}), 200


@api.route("/api/export", methods=["GET"])
def export_data():
    return jsonify(_journal().export_data()), 200


@api.route("/api/import", methods=["POST"])
def import_data():
    document = request.get_json(silent=True)
    count = _journal().import_data(document)
    return jsonify({
        "success": True,
        "imported": count,
        "message": f"Imported {count} entries"
    }), 200


if __name__ == '__main__':
    # Logging setup for debugging
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    setup_database(app)
    app.run(debug=app.config["DEBUG"], port=5000)
