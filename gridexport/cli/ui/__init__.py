"""콘솔 출력과 진행률 표시."""
