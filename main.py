# main.py
"""
Main entry point for LifePortal.

This script orchestrates the application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Builds the shared state (settings, theme, particle store).
4. Runs the window's event loop.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config, get_section


def main():
    """
    The main function to run the application.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- LifePortal Starting ---")

    window_params = get_section(config, 'window')
    particle_params = get_section(config, 'particles')
    storage_params = get_section(config, 'storage')
    run_params = get_section(config, 'run_control')

    from app import LifePortalApp
    from constants import DEFAULT_EXPORT_DIR, DEFAULT_PARTICLE_COUNT, DEFAULT_SETTINGS_FILE
    from screens import AppContext
    from storage import SettingsStore
    from store import ParticleStore
    from theme import Theme

    # --- Shared State ---
    # Built exactly once and handed to every screen by reference.
    settings = SettingsStore(storage_params.get('settings_file', DEFAULT_SETTINGS_FILE))
    particles = ParticleStore(
        particle_count=particle_params.get('count', DEFAULT_PARTICLE_COUNT),
        seed=particle_params.get('seed')
    )
    context = AppContext(
        particles=particles,
        settings=settings,
        theme=Theme(settings),
        export_dir=storage_params.get('export_dir', DEFAULT_EXPORT_DIR),
        log_throttle_ticks=run_params.get('log_throttle_ticks', 200),
    )

    app = LifePortalApp(context, window_params)
    try:
        app.run()
    finally:
        app.close()

    logging.info("--- LifePortal Shutting Down ---")


if __name__ == "__main__":
    main()
