"""Main entry point: load the stores, run the daily boundary check and log progress"""
import logging
import sys
from habitquest.config import validate_config, LOG_LEVEL, DEFAULT_USER_ID
from habitquest.services.container import init_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL, logging.INFO)
)

logger = logging.getLogger(__name__)


def main(user_id: str = DEFAULT_USER_ID) -> int:
    """Application entry point"""
    try:
        logger.info("Validating configuration...")
        validate_config()

        container = init_container()

        activity_store = container.activity_store
        if activity_store.check_and_reset_daily():
            logger.info("New day started")

        todo_store = container.todo_store
        reset = todo_store.reset_recurring_tasks(user_id)
        if reset:
            logger.info(f"{reset} recurring todos are due again")

        summary = container.progress_service.get_progress_summary(user_id)
        logger.info(
            f"User {user_id}: level {summary['current_level']}, "
            f"{summary['total_xp']} XP total, {summary['today_xp']} XP today"
        )
        if summary["next_reward"]:
            logger.info(
                f"Next reward: {summary['next_reward']['name']} "
                f"({summary['xp_to_next_reward']} XP to go)"
            )
        return 0

    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
