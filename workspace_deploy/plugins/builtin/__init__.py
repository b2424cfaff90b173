"""Built-in transport plugins"""
