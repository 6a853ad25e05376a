"""
Hurdle Game Server - Main Entry Point

This is the main entry point for the Hurdle game server.
It checks the bundled word list, builds the app and starts Flask-SocketIO.
"""

import os

from hurdle import create_app
from hurdle.config import config, get_word_statistics, validate_word_list_integrity
from hurdle.config.game_settings import DIFFICULTY_NAMES
from hurdle.utils.game_logger import game_logger


def main():
    """Main function to validate settings and start the server."""
    try:
        config_class = config[os.getenv('FLASK_ENV', 'default')]

        print("Checking word list...")
        validate_word_list_integrity()
        stats = get_word_statistics()
        print(f"✓ {stats['total_words']} words loaded")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        dictionary = app.extensions['hurdle_dictionary']
        usage_message = dictionary.get_api_usage_message()

        game_logger.logger.info("Hurdle Server Starting")

        print(f"\nStarting Hurdle Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Difficulty: {DIFFICULTY_NAMES.get(config_class.DIFFICULTY, config_class.DIFFICULTY)}")
        print(f"Hard mode: {config_class.HARD_MODE}")
        print(f"WordsAPI: {usage_message or 'disabled (local word list only)'}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Hurdle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
