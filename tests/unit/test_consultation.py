from unittest.mock import MagicMock

from models import Message, ProfileContext
from utils.consultation import (
    COLLECTION,
    DEFAULT_TOPIC,
    GREETING,
    get_consultation_stats,
    initial_messages,
    load_or_create,
    send,
)
from utils.response_engine import RESUME_ADVICE, INTERVIEW_ADVICE

def test_load_or_create_creates_session_with_greeting(mock_store):
    consultation = load_or_create(mock_store, 'user-123')

    mock_store.find.assert_called_once_with(
        COLLECTION,
        {'owner_id': 'user-123', 'status': 'active'},
        order_by=('created_at', 'desc'),
        limit=1,
    )
    mock_store.insert.assert_called_once()
    _, record = mock_store.insert.call_args[0]
    assert record['owner_id'] == 'user-123'
    assert record['topic'] == DEFAULT_TOPIC
    assert record['status'] == 'active'
    assert record['messages'] == [{'role': 'assistant', 'content': GREETING}]

    assert consultation.id == 'consult-1'
    assert consultation.messages == [Message('assistant', GREETING)]

def test_load_or_create_adopts_existing_session(mock_store):
    stored = [
        {'role': 'assistant', 'content': GREETING},
        {'role': 'user', 'content': 'interview help'},
        {'role': 'assistant', 'content': INTERVIEW_ADVICE},
        {'role': 'user', 'content': 'thanks'},
    ]
    mock_store.find.return_value = [{
        'id': 'existing-1', 'owner_id': 'user-123', 'topic': DEFAULT_TOPIC,
        'messages': stored, 'status': 'active',
        'created_at': '2024-01-01T00:00:00+00:00', 'updated_at': '2024-01-01T00:00:00+00:00',
    }]

    consultation = load_or_create(mock_store, 'user-123')

    mock_store.insert.assert_not_called()
    assert consultation.id == 'existing-1'
    assert len(consultation.messages) == 4
    assert consultation.messages[1] == Message('user', 'interview help')

def test_load_or_create_keeps_greeting_for_empty_stored_log(mock_store):
    mock_store.find.return_value = [{
        'id': 'existing-2', 'owner_id': 'user-123', 'topic': DEFAULT_TOPIC,
        'messages': [], 'status': 'active',
    }]

    consultation = load_or_create(mock_store, 'user-123')

    assert consultation.id == 'existing-2'
    assert consultation.messages == initial_messages()

def test_load_or_create_without_owner_is_noop(mock_store):
    assert load_or_create(mock_store, None) is None
    assert load_or_create(mock_store, '') is None
    mock_store.find.assert_not_called()
    mock_store.insert.assert_not_called()

def test_send_appends_turn_and_writes_full_log(mock_store):
    log = initial_messages()

    new_log = send(mock_store, 'user-123', 'consult-1', log, 'Tell me about resume tips')

    assert len(new_log) == 3
    assert new_log[1] == Message('user', 'Tell me about resume tips')
    assert new_log[2] == Message('assistant', RESUME_ADVICE)
    assert len(log) == 1

    mock_store.update.assert_called_once()
    collection, session_id, fields = mock_store.update.call_args[0]
    assert collection == COLLECTION
    assert session_id == 'consult-1'
    assert fields['messages'] == [m.to_dict() for m in new_log]
    assert 'updated_at' in fields

def test_send_whitespace_is_noop(mock_store):
    log = initial_messages()

    result = send(mock_store, 'user-123', 'consult-1', log, '   ')

    assert result == log
    mock_store.update.assert_not_called()

def test_send_requires_owner_and_session(mock_store):
    log = initial_messages()

    assert send(mock_store, None, 'consult-1', log, 'hello') == log
    assert send(mock_store, 'user-123', None, log, 'hello') == log
    mock_store.update.assert_not_called()

def test_send_keeps_user_text_as_typed(mock_store):
    new_log = send(mock_store, 'user-123', 'consult-1', initial_messages(), '  interview prep  ')
    assert new_log[1].content == '  interview prep  '

def test_consultation_stats(mock_store):
    mock_store.count.return_value = 3
    profile = ProfileContext(id='user-123', full_name='Jane Doe')

    stats = get_consultation_stats(mock_store, profile)

    mock_store.count.assert_called_once_with(COLLECTION, {'owner_id': 'user-123'})
    assert stats == {'consultations': 3, 'first_name': 'Jane'}

def test_consultation_stats_without_profile():
    store = MagicMock()
    assert get_consultation_stats(store, None) == {'consultations': 0, 'first_name': 'there'}
    store.count.assert_not_called()
