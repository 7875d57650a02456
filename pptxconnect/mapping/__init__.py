"""Mapping between routing shape kinds and PowerPoint presets"""
