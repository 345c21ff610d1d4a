"""stackdialog Core

DB/네트워크 무관 순수 Python 도메인 로직 (대화 스택, 선택지 인식).
"""
