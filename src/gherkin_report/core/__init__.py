"""Core logic for gherkin-report: config, analysis and report assembly."""
