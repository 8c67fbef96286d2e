"""checkhealth command line interface."""
