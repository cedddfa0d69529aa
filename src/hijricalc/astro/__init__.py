"""Analytic Sun/Moon positions and the moon-age oracle used by the astronomical calendar."""
