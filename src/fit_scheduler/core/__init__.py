"""Program generation engine: models, analysis, planning and scheduling."""
