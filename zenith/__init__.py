"""Zenith: receipt, voice and budget tracking from the terminal."""
