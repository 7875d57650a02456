"""PowerPoint input and output"""
