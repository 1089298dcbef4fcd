"""
설정 및 데이터 관리 유틸리티
"""
