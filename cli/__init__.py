"""ecogen command line interface."""
