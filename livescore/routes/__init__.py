"""Flask blueprints for the livescore site and its admin back-office."""
