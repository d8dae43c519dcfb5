"""Test configuration and fixtures."""

import pytest
from graphql import parse
from graphql.utilities import value_from_ast_untyped

from weaviate_query.config import Config


@pytest.fixture
def test_config():
    """In-memory configuration matching config/config.yaml."""
    return Config({
        'LOGGING': {
            'LEVEL': 'INFO',
            'LOG_FILE': 'logs/test.log'
        },
        'WEAVIATE': {
            'BASE_URL': 'http://weaviate.test:8080',
            'API_KEY': 'test-key',
            'TIMEOUT': 5,
            'MAX_RETRIES': 0
        },
        'RENDERING': {
            'TOP_OCCURRENCES_LIMIT': 5,
            'DEFAULT_CONSISTENCY_LEVEL': None,
            'INDENT': 2
        }
    })


@pytest.fixture
def temp_log_file(tmp_path):
    """Create a temporary log file."""
    log_file = tmp_path / "test.log"
    yield str(log_file)
    if log_file.exists():
        log_file.unlink()


@pytest.fixture
def mock_transport(mocker):
    """Transport double returning an empty GraphQL envelope."""
    transport = mocker.Mock()
    transport.execute.return_value = {"data": {}}
    return transport


@pytest.fixture
def parse_query():
    """
    Parse a rendered document and return (operation field, collection field, arguments).

    Arguments are decoded to plain Python values, so tests can compare what the server
    would receive rather than the exact text.
    """
    def _parse(text):
        document = parse(text)
        operation = document.definitions[0].selection_set.selections[0]
        collection = operation.selection_set.selections[0]
        arguments = {arg.name.value: value_from_ast_untyped(arg.value) for arg in collection.arguments}
        return operation, collection, arguments
    return _parse
