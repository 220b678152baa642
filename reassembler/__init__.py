"""Reassembles chunked Unity WebGL build files before deployment."""
