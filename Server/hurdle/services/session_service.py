"""
Session Service

In-memory registry of single games and hurdle chains, keyed by id, for the
HTTP and WebSocket layers.
"""

import uuid
from typing import Dict, Optional, Tuple

from .dictionary import Dictionary
from .game_service import GameController
from .hurdle_service import HurdleController


class SessionService:
    """
    Holds every live game for one application instance.

    The service is created by the app factory and stored in
    ``app.extensions``; nothing here is module-global.
    """

    def __init__(self, dictionary: Dictionary, hard_mode: bool = False):
        self.dictionary = dictionary
        self.hard_mode = hard_mode
        self.games: Dict[str, GameController] = {}
        self.hurdles: Dict[str, HurdleController] = {}

    async def create_game(self) -> Tuple[str, GameController]:
        """
        Creates a single (non-chained) game with a random secret word.

        Returns:
            Tuple of (game_id, controller)
        """
        controller = GameController(self.dictionary, hard_mode=self.hard_mode)
        await controller.start_new_game()

        game_id = str(uuid.uuid4())
        self.games[game_id] = controller
        return game_id, controller

    def get_game(self, game_id: str) -> Optional[GameController]:
        return self.games.get(game_id)

    def delete_game(self, game_id: str) -> bool:
        return self.games.pop(game_id, None) is not None

    async def create_hurdle(self) -> Tuple[str, HurdleController]:
        """
        Starts a new hurdle chain.

        Returns:
            Tuple of (hurdle_id, controller); the id is the session id
        """
        controller = HurdleController(self.dictionary, hard_mode=self.hard_mode)
        session = await controller.start_hurdle_mode()

        self.hurdles[session.session_id] = controller
        return session.session_id, controller

    def get_hurdle(self, hurdle_id: str) -> Optional[HurdleController]:
        return self.hurdles.get(hurdle_id)

    def delete_hurdle(self, hurdle_id: str) -> bool:
        return self.hurdles.pop(hurdle_id, None) is not None

    def get_stats(self) -> Dict[str, int]:
        return {
            'active_games': len(self.games),
            'active_hurdles': sum(1 for controller in self.hurdles.values() if controller.is_active()),
            'hurdle_sessions': len(self.hurdles)
        }
