from flask import Flask, jsonify, request
import os
import datetime
import logging
from typing import Optional

from dotenv import load_dotenv

from adapters.base import ProfileStore
from adapters.memory_adapter import MemoryProfileStore
from adapters.mongo_adapter import MongoProfileStore
from directory.errors import RemoteServiceError, StoreError, ValidationError
from directory.filters import FilterSpec
from directory.normalizer import WEBFLOW_SHAPE, unwrap_payload
from directory.service import ProfileService
from integrations.memberstack import DEFAULT_API_URL, MemberstackClient, sync_member

#python app.py
#STORE_BACKEND=memory python app.py  (seeded sample profiles, no Mongo needed)

load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

logger = logging.getLogger(__name__)

APP_ENV = os.getenv("APP_ENV")
DB_REGION = os.getenv("DB_REGION")

# Absolute path to the audit log file
LOG_FILE = os.getenv("AUDIT_LOG_FILE") or os.path.join(os.path.dirname(__file__), "log.txt")

BACKEND_MONGO = "mongo"
BACKEND_MEMORY = "memory"
BACKEND_DEFAULT = os.getenv("STORE_BACKEND", BACKEND_MONGO).lower()

INTERNAL_ERROR = "Internal server error"


def build_store() -> ProfileStore:
    if BACKEND_DEFAULT == BACKEND_MEMORY:
        seed = os.getenv("MEMORY_SEED", "true").lower() in {"1", "true", "yes", "on"}
        return MemoryProfileStore(seed=seed)

    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        logger.warning("STORE_BACKEND is 'mongo' but MONGO_URI is missing; using the in-memory store.")
        return MemoryProfileStore(seed=True)

    return MongoProfileStore(mongo_uri=mongo_uri, db_name=os.getenv("MONGO_DB", "mentorship"))


def build_memberstack_client() -> MemberstackClient:
    api_key = os.getenv("MEMBERSTACK_API_KEY")
    if not api_key:
        logger.warning("MEMBERSTACK_API_KEY is not set; /memberstack updates will fail.")
    return MemberstackClient(
        api_key=api_key,
        base_url=os.getenv("MEMBERSTACK_API_URL", DEFAULT_API_URL),
        timeout=float(os.getenv("MEMBERSTACK_TIMEOUT", "30")),
    )


def append_to_log(entry):
    try:
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(entry + "\n")
    except OSError as e:
        logger.warning("Failed to write to %s: %s", LOG_FILE, e)


def _audit(status_code, details):
    timestamp = datetime.datetime.now().strftime("%d/%b/%Y %H:%M:%S")
    lines = "\n".join(f"  → {line}" for line in details)
    append_to_log(
        f'{request.remote_addr or "-"} - - [{timestamp}] "{request.method} {request.path} HTTP/1.1" {status_code} - SUCCESS\n'
        + lines
    )


def create_app(store: Optional[ProfileStore] = None, memberstack: Optional[MemberstackClient] = None) -> Flask:
    """Build the Flask app around one store and one Memberstack client, created once at startup."""
    app = Flask(__name__)

    logger.info("APP_ENV: %s", APP_ENV)
    logger.info("DB_REGION: %s", DB_REGION)

    store = store if store is not None else build_store()
    memberstack = memberstack if memberstack is not None else build_memberstack_client()
    profiles = ProfileService(store)

    @app.route('/health')
    def health():
        return jsonify({"ok": True, "env": APP_ENV})

    @app.route('/directory')
    def directory():
        logger.info("Incoming /directory request with filters: %s", request.args.to_dict(flat=False))
        query = FilterSpec.from_args(request.args)
        try:
            users = profiles.directory(request.args.get("collection"), query)
        except Exception:
            logger.exception("Error in /directory")
            return jsonify({"error": INTERNAL_ERROR}), 500
        return jsonify(users)

    @app.route('/users/<user_id>', methods=['PUT'])
    def update_user(user_id):
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object."}), 400

        # Users may only update their own profile
        claimed = data.get("userId")
        if claimed and str(claimed) != user_id:
            return jsonify({"error": "Forbidden: You can only update your own profile"}), 403

        try:
            collection, profile = profiles.update_from_payload(user_id, data)
        except ValidationError as exc:
            return jsonify({"error": str(exc)}), exc.status
        except Exception:
            logger.exception("PUT /users/%s error", user_id)
            return jsonify({"error": "Failed to update profile"}), 400

        _audit(200, [f"Collection: {collection}", f"Completeness: {profile['completeness']}"])
        return jsonify({
            "message": f"User {user_id} updated successfully in {collection}",
            "profile": profile,
        }), 200

    @app.route('/webflow-webhook', methods=['POST'])
    def webflow_webhook():
        data = unwrap_payload(request.get_json(force=True, silent=True))

        user_id = data.get(WEBFLOW_SHAPE.user_id_key)
        if not user_id:
            return jsonify({"error": "Missing User ID"}), 400
        user_id = str(user_id)

        try:
            collection, profile = profiles.update_from_payload(user_id, data, WEBFLOW_SHAPE)
        except ValidationError as exc:
            return jsonify({"error": str(exc)}), exc.status
        except Exception:
            logger.exception("Webhook error for %s", user_id)
            return jsonify({"error": INTERNAL_ERROR}), 500

        _audit(200, ["Source: Webflow", f"Collection: {collection}", f"Completeness: {profile['completeness']}"])
        return jsonify({
            "message": f"User {user_id} updated from Webflow",
            "profile": profile,
        })

    @app.route('/memberstack/<member_id>/update', methods=['POST'])
    def memberstack_update(member_id):
        updates = request.get_json(force=True, silent=True)
        if not isinstance(updates, dict):
            return jsonify({"error": "Request body must be a JSON object."}), 400

        try:
            member = sync_member(memberstack, store, member_id, updates)
        except (RemoteServiceError, StoreError) as exc:
            logger.error("Error updating Memberstack member %s: %s", member_id, exc)
            return jsonify({"error": "Failed to update member"}), 500
        except Exception:
            logger.exception("Unexpected error updating Memberstack member %s", member_id)
            return jsonify({"error": "Failed to update member"}), 500

        _audit(200, [f"Member: {member_id}", f"Fields: {', '.join(sorted(updates)) or '-'}"])
        return jsonify({
            "message": "Updated Memberstack member and directory record",
            "data": member,
        })

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(debug=True)
