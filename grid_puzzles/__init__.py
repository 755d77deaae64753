"""
Grid Puzzles: Sudoku and Word-Search Generators

A small, modular system for generating grid logic puzzles by constrained
random filling.

Main Components:
- core: Base interfaces for puzzles and generators, error types
- generate: Sudoku and word-search engines, batch builder
- utils: Configuration loading and word normalization

Quick Start:
    import random
    from grid_puzzles.generate.sudoku_generator import SudokuGenerator

    generator = SudokuGenerator(hidden_count=60, rng=random.Random(7))
    puzzle = generator.generate_puzzle("sudoku_9x9_001")
"""

__version__ = "0.1.0"
