import pytest

from app import create_app


TEST_DB_CONFIG = {
    'host': 'localhost',
    'port': 3306,
    'user': 'test',
    'password': 'test',
    'database': 'quiz_show_test',
}


class FakeStore:
    """In-memory stand-in for the episode/participant/event tables"""

    def __init__(self):
        self.participants = {}
        self.episodes = {}
        self.events = []
        self.fail_on_insert = None
        self.inserts = 0

    def add_participant(self, participant_id, full_name, status):
        self.participants[participant_id] = {'id': participant_id, 'full_name': full_name, 'status': status}

    def add_episode(self, episode_id, participant_id, link, date, available=1000):
        self.episodes[episode_id] = {
            'id': episode_id,
            'episodeLink': link,
            'date': date,
            'totalAmountAvailableToWin': available,
            'participant_id': participant_id,
        }

    def add_event(self, episode_id, **fields):
        event = {'id': len(self.events) + 1, 'episode_id': episode_id}
        event.update(fields)
        self.events.append(event)

    def execute_query(self, query, params=None, fetch_one=False):
        if 'FROM episodes e' in query and 'WHERE e.id' in query:
            episode = self.episodes.get(params[0])
            if episode is None:
                return None
            return {k: v for k, v in episode.items() if k != 'participant_id'}

        if 'FROM episode_events ee' in query:
            episode_id, status = params
            episode = self.episodes[episode_id]
            participant = self.participants[episode['participant_id']]
            if participant['status'] != status:
                return []
            return [
                {
                    'id': event['id'],
                    'question': event.get('question'),
                    'correctAnswer': event.get('correct_answer'),
                    'response': event.get('response'),
                    'isCorrect': event.get('is_correct'),
                    'type': event.get('type'),
                    'amount': event.get('amount'),
                    'balance': event.get('balance'),
                    'participantFullName': participant['full_name'],
                    'episodeDate': episode['date'],
                }
                for event in self.events
                if event['episode_id'] == episode_id
            ]

        raise AssertionError(f"Unexpected query: {query}")

    def execute_write(self, query, params=None):
        self.inserts += 1
        if self.fail_on_insert == self.inserts:
            raise RuntimeError("connection lost")
        episode_id, event_type, question, correct_answer, response, is_correct, amount, balance = params
        self.add_event(
            episode_id,
            type=event_type,
            question=question,
            correct_answer=correct_answer,
            response=response,
            is_correct=None if is_correct is None else int(is_correct),
            amount=amount,
            balance=balance,
        )
        return self.events[-1]['id']


@pytest.fixture
def app():
    app = create_app(db_config=TEST_DB_CONFIG)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(monkeypatch):
    store = FakeStore()
    monkeypatch.setattr("routes.events.execute_query", store.execute_query)
    monkeypatch.setattr("routes.events.execute_write", store.execute_write)
    return store
