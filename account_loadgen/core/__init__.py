"""Pure functions with no I/O: report formatting, request builders."""
