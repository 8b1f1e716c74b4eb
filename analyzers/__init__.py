"""analyzers - 저장 데이터 분석 모듈"""
