# ui/progress.py

HEAT_SYMBOLS = ["·", "░", "▒", "▓", "█", "■"]

def progress_bar(percent: int, length: int = 10):
    """Текстовый progress bar"""
    done = int(length * percent // 100)
    todo = length - done
    return "█" * done + "░" * todo + f" {percent}%"

def routines_progress_bar(done: int, total: int):
    percent = int((done / total) * 100) if total else 0
    return progress_bar(percent)

def heat_symbol(completed: int):
    """0..5 выполненных рутин, всё что больше - максимальная яркость"""
    return HEAT_SYMBOLS[max(0, min(completed, len(HEAT_SYMBOLS) - 1))]

def score_emoji(score: int):
    if score >= 30:
        return "🏆"
    elif score >= 7:
        return "🔥"
    elif score > 0:
        return "📈"
    elif score == 0:
        return "➖"
    else:
        return "📉"
