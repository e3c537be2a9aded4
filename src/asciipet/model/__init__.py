"""
The MODEL layer contains pure data structures and frame logic.
It has NO knowledge of the GUI (Qt) or the OS metric sampler.
It deals with glyph mapping, physics, effects and preference I/O.
"""
