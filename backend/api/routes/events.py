# Episode event endpoints

# Retrieves the events recorded for one episode and records new batches of events

from flask import Blueprint, request, jsonify
from database import execute_query, execute_write, to_number, EXACT_COLLATION
from scoring import build_event, serialize_event
import logging

events_bp = Blueprint('events', __name__)
logger = logging.getLogger(__name__)

# ============================================================
# UTILITY FUNCTIONS
# ============================================================

def validate_episode_id(episode_id):
    """Validate episodeId parameter, returns (id, error)"""
    if episode_id is None or episode_id == '':
        return None, {"error": "episodeId is required"}

    if isinstance(episode_id, bool):
        return None, {"error": "episodeId is malformed"}

    try:
        value = int(str(episode_id).strip())
    except ValueError:
        return None, {"error": "episodeId is malformed"}

    if value <= 0:
        return None, {"error": "episodeId is malformed"}

    return value, None


def get_episode(episode_id):
    query = """
    SELECT
        e.id,
        e.episode_link AS episodeLink,
        e.date,
        e.available_amount_to_win AS totalAmountAvailableToWin
    FROM episodes e
    WHERE e.id = %s
    """
    return execute_query(query, (episode_id,), fetch_one=True)


# ============================================================
# Episode Event Detail
# ============================================================
@events_bp.route("/event-detail", methods=["GET"])
def get_episode_event_detail():
    """
    Events of one episode, annotated with participant name and episode date.

    Required Inputs:
    - episodeId (query string)

    Only events whose participant has status 'Completed' are visible.
    """
    episode_id, validation_error = validate_episode_id(request.args.get('episodeId'))
    if validation_error:
        return jsonify({"message": validation_error["error"]}), 400

    try:
        episode = get_episode(episode_id)
        if not episode:
            return jsonify({"message": "Episode not found"}), 404

        query = f"""
        SELECT
            ee.id,
            ee.question,
            ee.correct_answer AS correctAnswer,
            ee.response,
            ee.is_correct AS isCorrect,
            ee.type,
            ee.amount,
            ee.balance,
            p.full_name AS participantFullName,
            e.date AS episodeDate
        FROM episode_events ee
        JOIN episodes e ON ee.episode_id = e.id
        JOIN participants p ON e.participant_id = p.id
        WHERE ee.episode_id = %s
          AND p.status COLLATE {EXACT_COLLATION} = %s
        ORDER BY ee.id
        """
        rows = execute_query(query, (episode_id, 'Completed'))

        if not rows:
            return jsonify({"message": "No events found with participants"}), 404

        events = [serialize_event(row) for row in rows]
        participant_name = events[0].get('participantFullName')
        message = f"Successfully retrieved {len(events)} event(s) for participant {participant_name}."

        return jsonify({
            "message": message,
            "events": events,
            "episodeLink": episode['episodeLink'],
            "episodeDate": episode['date'],
            "totalAmountAvailableToWin": to_number(episode["totalAmountAvailableToWin"])
        }), 200
    except Exception as e:
        logger.error(f"Error retrieving episode details: {str(e)}")
        return jsonify({"message": "Error retrieving episode details", "error": str(e)}), 500


# ============================================================
# Record Episode Events
# ============================================================
@events_bp.route("/events", methods=["POST"])
def handle_episode_events():
    """
    Record a batch of events for an episode.

    Body:
    - episodeId
    - events: [{question, correctAnswer, response, type, amount, balance}]

    Events are saved one by one in submission order. A failure stops the
    batch; events saved before it are kept.
    """
    params = request.get_json(silent=True)
    if not isinstance(params, dict):
        params = {}

    episode_id, validation_error = validate_episode_id(params.get('episodeId'))
    if validation_error:
        return jsonify({"message": validation_error["error"]}), 400

    events = params.get('events')
    if events is None:
        events = []
    if not isinstance(events, list) or not all(isinstance(event, dict) for event in events):
        return jsonify({"message": "events must be a list of objects"}), 400

    try:
        if not get_episode(episode_id):
            return jsonify({"message": "Episode not found"}), 404

        query = """
        INSERT INTO episode_events
            (episode_id, type, question, correct_answer, response, is_correct, amount, balance)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        """

        saved_events = []
        for payload in events:
            event = build_event(payload, episode_id)
            event_id = execute_write(query, (
                episode_id,
                event['type'],
                event['question'],
                event['correctAnswer'],
                event['response'],
                event.get('isCorrect'),
                event['amount'],
                event['balance'],
            ))
            saved_events.append({"id": event_id, **event})

        logger.info(f"Recorded {len(saved_events)} event(s) for episode {episode_id}")
        return jsonify({"message": "Episode events handled successfully", "events": saved_events}), 200
    except Exception as e:
        logger.error(f"Error handling episode events: {str(e)}")
        return jsonify({"message": "Error handling episode events", "error": str(e)}), 500
