"""Iconfetch: resolve the best favicon for any web page."""
