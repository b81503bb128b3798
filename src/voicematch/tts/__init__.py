"""Speech rendering support: synthesis settings and their optimizer."""
