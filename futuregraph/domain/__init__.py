"""Domain layer for FutureGraph.

Pure, I/O-free building blocks: immutable session/round models, the law
registry, the progression and QA validators, the approval gate and the
report compiler. Nothing in this package awaits or performs I/O.
"""
