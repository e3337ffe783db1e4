#!/usr/bin/env python3
"""
Main entry point for the duck IRC idler
"""

from duck.main import run

if __name__ == "__main__":
    run()
