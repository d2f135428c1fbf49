# Statistics endpoints

# Per-show totals across all episodes, and global performance of participants
# by question type and code-mix response

from flask import Blueprint, jsonify
from database import run_parallel, to_number, EXACT_COLLATION
from scoring import QUESTION_TYPES, CODE_MIX
import logging

stats_bp = Blueprint('stats', __name__)
logger = logging.getLogger(__name__)


# ============================================================
# UTILITY FUNCTIONS
# ============================================================

def first_value(rows, key):
    """Value of key in the single-row aggregate, 0 when nothing matched"""
    if not rows:
        return 0
    return to_number(rows[0].get(key))


def by_type(rows, fields):
    """
    Index grouped rows by event type.
    Question types without a group get zeros for every field.
    """
    result = {}
    for question_type in QUESTION_TYPES:
        row = next((r for r in rows if r['type'] == question_type), None)
        result[question_type] = {
            field: to_number(row[field]) if row else 0
            for field in fields
        }
    return result


# ============================================================
# Per-Show Statistics
# ============================================================
@stats_bp.route("/stats", methods=["GET"])
def get_episode_stats():
    """
    Totals across every episode: episodes, questions asked, correct answers,
    amount won, and the pool of participants waiting to be scheduled.
    """
    try:
        placeholders = ','.join(['%s'] * len(QUESTION_TYPES))

        queries = [
            # Episode link index, newest first
            ("""
            SELECT id, episode_link AS episodeLink
            FROM episodes
            ORDER BY date DESC, id DESC
            """, None),
            (f"""
            SELECT COUNT(*) AS totalAskedQuestions
            FROM episode_events
            WHERE type IN ({placeholders})
            """, QUESTION_TYPES),
            ("""
            SELECT correct_answer AS correctAnswer
            FROM episode_events
            WHERE is_correct = 1
            ORDER BY id
            """, None),
            ("""
            SELECT SUM(amount_won) AS totalAmountWon
            FROM episodes
            """, None),
            # Request pool
            (f"""
            SELECT
                id,
                full_name AS fullName,
                email,
                state,
                gender,
                status,
                social_media_handle AS socialMediaHandle
            FROM participants
            WHERE status COLLATE {EXACT_COLLATION} = %s
            ORDER BY id
            """, ('Pending',)),
        ]

        episodes, asked, correct, amount_won, pending = run_parallel(queries)

        return jsonify({
            "stats": {
                "message": "Successfully retrieved stats",
                "totalEpisodes": len(episodes),
                "totalAskedQuestions": first_value(asked, 'totalAskedQuestions'),
                "totalRightQuestions": {
                    "count": len(correct),
                    "correctAnswers": [row['correctAnswer'] for row in correct]
                },
                "totalAmountWon": first_value(amount_won, 'totalAmountWon'),
                "requestPool": {
                    "total": len(pending),
                    "participants": pending
                },
                "episodeLinks": [
                    {"episodeLink": row['episodeLink'], "id": row['id']}
                    for row in episodes
                ],
            }
        }), 200
    except Exception as e:
        logger.error(f"Error retrieving episode statistics: {str(e)}")
        return jsonify({"message": "Error retrieving episode statistics", "error": str(e)}), 500


# ============================================================
# Global Performance Statistics
# ============================================================
@stats_bp.route("/performance-stats", methods=["GET"])
def get_global_performance_stats():
    """Amounts won and lost per question type, and code-mix losses per response"""
    try:
        placeholders = ','.join(['%s'] * len(QUESTION_TYPES))

        queries = [
            (f"""
            SELECT
                type,
                SUM(amount) AS totalAmountWon,
                COUNT(*) AS totalCorrectQuestions
            FROM episode_events
            WHERE type IN ({placeholders}) AND is_correct = 1
            GROUP BY type
            """, QUESTION_TYPES),
            (f"""
            SELECT
                type,
                SUM(amount) AS totalAmountLost,
                COUNT(*) AS totalIncorrectQuestions
            FROM episode_events
            WHERE type IN ({placeholders}) AND is_correct = 0
            GROUP BY type
            """, QUESTION_TYPES),
            (f"""
            SELECT COUNT(*) AS totalAskedQuestions
            FROM episode_events
            WHERE type IN ({placeholders})
            """, QUESTION_TYPES),
            # Ties on amount lost are ordered by response text
            (f"""
            SELECT
                response COLLATE {EXACT_COLLATION} AS codemixResponse,
                SUM(amount) AS totalAmountLost
            FROM episode_events
            WHERE type = %s
            GROUP BY codemixResponse
            ORDER BY totalAmountLost DESC, codemixResponse ASC
            """, (CODE_MIX,)),
            (f"""
            SELECT
                response COLLATE {EXACT_COLLATION} AS codemixResponse,
                COUNT(*) AS totalResponses
            FROM episode_events
            WHERE type = %s
            GROUP BY codemixResponse
            ORDER BY codemixResponse ASC
            """, (CODE_MIX,)),
        ]

        won, lost, asked, codemix_loss, codemix_responses = run_parallel(queries)

        total_amount_won = by_type(won, ['totalAmountWon', 'totalCorrectQuestions'])
        total_amount_lost = by_type(lost, ['totalAmountLost', 'totalIncorrectQuestions'])

        return jsonify({
            "totalAmountWon": total_amount_won,
            "totalAmountLost": total_amount_lost,
            "totalAskedQuestions": first_value(asked, 'totalAskedQuestions'),
            "codemixWordLoss": [
                {"response": row['codemixResponse'], "totalAmountLost": to_number(row['totalAmountLost'])}
                for row in codemix_loss
            ],
            "totalCodemixResponses": [
                {"response": row['codemixResponse'], "totalResponses": to_number(row['totalResponses'])}
                for row in codemix_responses
            ],
            "correctnessRates": calculate_correctness_rates(total_amount_won, total_amount_lost),
        }), 200
    except Exception as e:
        logger.error(f"Error retrieving performance stats: {str(e)}")
        return jsonify({"message": "Error retrieving performance stats", "error": str(e)}), 500


def calculate_correctness_rates(won_by_type, lost_by_type):
    """Share of answered questions that were correct, per question type"""
    rates = {}
    for question_type in QUESTION_TYPES:
        correct = won_by_type[question_type]['totalCorrectQuestions']
        incorrect = lost_by_type[question_type]['totalIncorrectQuestions']
        answered = correct + incorrect
        rates[question_type] = {
            "correct": correct,
            "incorrect": incorrect,
            "answered": answered,
            "rate": round(correct / answered, 4) if answered else 0
        }
    return rates
