"""
Simulation core: spawning, capture, server heat, economy, difficulty.
NO UI DEPENDENCIES.
"""
