"""Iconfetch middlewares"""
