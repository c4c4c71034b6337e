"""Game rules: models, variants, the per-tick step and the controller."""
