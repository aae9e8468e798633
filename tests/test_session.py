import pytest
from unittest.mock import AsyncMock, patch, MagicMock

from pizza_pension.core.db.session import get_db


def _mock_session_factory(exit_result=None):
    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=exit_result)
    mock_session.close = AsyncMock()

    mock_session_factory = MagicMock()
    mock_session_factory.return_value = mock_session
    return mock_session_factory, mock_session


@pytest.mark.asyncio
async def test_get_db_yields_session_and_closes_it():
    mock_session_factory, mock_session = _mock_session_factory()

    with patch("pizza_pension.core.db.session.AsyncSessionLocal", new=mock_session_factory):
        async for session in get_db():
            assert session is mock_session
            mock_session.close.assert_not_awaited()

        mock_session.close.assert_awaited_once()
        mock_session_factory.assert_called_once()


@pytest.mark.asyncio
async def test_get_db_closes_session_on_error():
    mock_session_factory, mock_session = _mock_session_factory(exit_result=False)

    with patch("pizza_pension.core.db.session.AsyncSessionLocal", new=mock_session_factory):
        gen = get_db()
        with pytest.raises(ValueError, match="Simulated error in DB operation"):
            session = await gen.__anext__()
            assert session is mock_session
            await gen.athrow(ValueError("Simulated error in DB operation"))

        mock_session.close.assert_awaited_once()
