"""
Puzzle Hub Server - Main Entry Point

This is the main entry point for the puzzle hub server.
It initializes all services and starts the Flask application.
"""

from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from puzzlehub import create_app
from puzzlehub.config import Config
from puzzlehub.services.auth_service import initialize_auth_service
from puzzlehub.services.puzzle_service import initialize_puzzle_service
from puzzlehub.services.result_service import initialize_result_service
from puzzlehub.utils.game_logger import game_logger


def connect_database():
    """Connect to MongoDB, returning the database or None when unavailable."""
    if not Config.MONGO_URI:
        print("✗ MongoDB URI not configured")
        return None

    try:
        client = MongoClient(Config.MONGO_URI, server_api=ServerApi('1'))
        client.admin.command('ping')
    except PyMongoError as e:
        print(f"✗ Failed to connect to MongoDB: {e}")
        game_logger.logger.error(f"Failed to connect to MongoDB: {e}")
        return None

    print("✓ Connected to MongoDB")
    return client[Config.MONGO_DB_NAME]


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        db = connect_database()

        # Initialize authentication and result services
        auth_service = None
        result_service = None
        if db is not None and Config.JWT_SECRET:
            auth_service = initialize_auth_service(db, Config.JWT_SECRET, Config.JWT_EXPIRATION_DAYS)
            print("✓ Authentication service initialized successfully")
            result_service = initialize_result_service(db)
            print("✓ Result service initialized successfully")
        else:
            print("✗ Database or JWT Secret not configured, sign-in and results disabled")

        # Initialize puzzle service
        initialize_puzzle_service(Config.UPSTREAM_BASE_URL, Config.UPSTREAM_TIMEOUT_SECONDS)
        print("✓ Puzzle service initialized successfully")

        # Create Flask app
        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Puzzle Hub Server Starting")

        print(f"\nStarting Puzzle Hub Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Auth available: {auth_service is not None}")
        print(f"Results available: {result_service is not None}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Puzzle Hub Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
