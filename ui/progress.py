# ui/progress.py

def progress_bar(percent: int, length: int = 12):
    """Text progress bar made of blocks"""
    percent = max(0, min(percent, 100))
    done = int(length * percent // 100)
    todo = length - done
    return "█" * done + "░" * todo + f" {percent}%"


def ratio_bar(done: int, total: int, length: int = 12):
    percent = int((done / total) * 100) if total else 0
    return progress_bar(percent, length)


def count_bar(count: int, max_count: int, length: int = 20):
    """Bar proportional to count, without a percentage suffix"""
    if count <= 0 or max_count <= 0:
        return ""
    return "▇" * max(1, round(length * min(count, max_count) / max_count))


def streak_emoji(streak: int):
    if streak >= 30:
        return "🏆"
    elif streak >= 7:
        return "🔥"
    elif streak >= 3:
        return "✨"
    else:
        return "🔹"
