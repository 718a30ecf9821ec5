"""
PyForge: command-line scaffold for creating and managing Python projects.

Layers:
  Taxonomy:    every failure is one PyForgeError subclass with an exit code
  Validation:  project names, runtime versions, project markers, templates
  CLI:         argparse front end; renders errors and maps them to exit codes
"""

__version__ = "1.0.0"
