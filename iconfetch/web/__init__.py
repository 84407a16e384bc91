"""Iconfetch web API"""
