# main.py
"""
Main entry point for the Snowfall animation.

This script orchestrates the entire application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Sets up the window, the tunables and the particle field.
4. Runs the frame loop.
5. Handles clean shutdown.
"""
import logging
import cProfile
import pstats
import io

import pygame

from utils import setup_logging, load_config, field_statistics, log_throttle_from_config
from constants import DEFAULT_MAX_DELTA_TIME, DEFAULT_WINDOW_SIZE, FPS, FULLSCREEN


def main():
    """
    The main function to run the animation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Snowfall Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from tunables import Tunables, default_controls, particle_count_from_config
    from simulation import FrameScheduler, ParticleField
    from visualization import Visualizer

    # --- Component Initialization ---
    quantum_enabled = bool(sim_params.get('quantum_enabled', False))
    tunables = Tunables.from_config(sim_params)
    particle_count = particle_count_from_config(sim_params)
    log_throttle = log_throttle_from_config(run_params)

    # 1. The visualizer owns the window and therefore the live bounds.
    visualizer = Visualizer(
        controls=default_controls(quantum_enabled),
        fullscreen=vis_params.get('fullscreen', FULLSCREEN),
        window_size=tuple(vis_params.get('window_size', DEFAULT_WINDOW_SIZE)),
        interactive_controls=vis_params.get('interactive_controls', True)
    )

    # 2. The field re-reads the bounds every frame so resizes take effect.
    field = ParticleField(
        particle_count,
        visualizer.bounds,
        tunables,
        quantum_enabled=quantum_enabled
    )
    scheduler = FrameScheduler(
        field,
        visualizer.canvas,
        max_delta_time=sim_params.get('max_delta_time', DEFAULT_MAX_DELTA_TIME)
    )

    profiler = cProfile.Profile()
    max_steps = run_params.get('max_steps', 0) # 0 runs until the window is closed

    running = True
    step_num = 0
    reported_clamps = 0

    profiler.enable()
    while running:
        scheduler.tick(pygame.time.get_ticks())
        step_num += 1

        if not visualizer.draw(field, tunables):
            running = False

        visualizer.clock.tick(FPS)

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            logging.info(f"Frame {step_num} | FPS: {visualizer.clock.get_fps():.1f}")
            stats = field_statistics(field)
            logging.debug(
                f"Frame {step_num} | Mean fall speed: {stats['mean_fall_speed']:.2f} | "
                f"Mean drift: {stats['mean_drift_speed']:.2f} | "
                f"On screen: {stats['on_screen_ratio']:.0%}"
            )
            if scheduler.clamped_frames > reported_clamps:
                logging.warning(
                    f"{scheduler.clamped_frames - reported_clamps} slow frame(s) clamped to "
                    f"{scheduler.max_delta_time:.3f}s since the last report."
                )
                reported_clamps = scheduler.clamped_frames

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping animation.")
            running = False
    profiler.disable()

    visualizer.close()
    logging.info("Frame loop finished.")

    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Snowfall Shutting Down ---")


if __name__ == "__main__":
    main()
