"""Test package for Guess the Angle.

Core modules are tested directly with fake UI hosts; the pygame shell is
exercised headlessly using SDL's dummy video driver so no real window opens.
To run these tests, execute ``pytest`` from the project root.
"""
