"""Text-processing pipeline: data parsing, templating, markup and output."""
