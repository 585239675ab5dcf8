#!/usr/bin/env python3
"""
Photo Finder - Main entry point

This is a simple launcher that runs the photofinder package as a module.
"""

if __name__ == "__main__":
    import runpy

    # Run the photofinder package as a module
    runpy.run_module("photofinder", run_name="__main__")
