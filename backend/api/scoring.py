# Answer scoring rules for episode events

from database import to_number

QUESTION = 'QUESTION'
QUESTION_NUMBER = 'QUESTION_NUMBER'
CODE_MIX = 'CODE_MIX'

QUESTION_TYPES = (QUESTION, QUESTION_NUMBER)

NO_RESPONSE = "No response?"


def is_question_type(event_type):
    return event_type in QUESTION_TYPES


def normalize_response(response):
    """Trim a participant response; missing or blank becomes NO_RESPONSE"""
    if response is None:
        return NO_RESPONSE
    text = str(response).strip()
    return text if text else NO_RESPONSE


def is_correct_answer(response, correct_answer):
    """
    Case-insensitive, whitespace-trimmed comparison.
    The no-response sentinel and a missing correct answer never score.
    """
    response = normalize_response(response)
    if response == NO_RESPONSE:
        return False
    if correct_answer is None:
        return False
    expected = str(correct_answer).strip()
    if not expected:
        return False
    return response.lower() == expected.lower()


def build_event(payload, episode_id):
    """
    Turn a submitted event payload into the record to persist.
    Only QUESTION / QUESTION_NUMBER events carry isCorrect.
    """
    event_type = payload.get('type')
    correct_answer = payload.get('correctAnswer')
    response = normalize_response(payload.get('response'))

    event = {
        'question': payload.get('question'),
        'correctAnswer': correct_answer,
        'response': response,
        'type': event_type,
        'amount': payload.get('amount'),
        'balance': payload.get('balance'),
        'episodeId': episode_id,
    }
    if is_question_type(event_type):
        event['isCorrect'] = is_correct_answer(response, correct_answer)
    return event


def serialize_event(row):
    """Shape a stored event row for the API (drops isCorrect on non-question types)"""
    event = dict(row)
    for key in ('amount', 'balance'):
        if event.get(key) is not None:
            event[key] = to_number(event[key])
    if is_question_type(event.get('type')):
        if event.get('isCorrect') is not None:
            event['isCorrect'] = bool(event['isCorrect'])
    else:
        event.pop('isCorrect', None)
    return event
