"""
酒店后台管理服务
"""
__version__ = "1.0.0"
