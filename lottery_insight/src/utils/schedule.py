"""
추첨 일정 모듈

복권별 추첨 요일/시각과 결과 데이터가 공개되는 시각을 계산하고,
사용자 시간대 기준 안내 문구를 만듭니다.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, Iterator, Optional, Tuple
from zoneinfo import ZoneInfo

DAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

# 마지막 조회 후 이 시간이 지나면 새 결과가 있다고 판단
STALE_AFTER = timedelta(hours=96)

@dataclass(frozen=True)
class DrawSchedule:
    """복권별 추첨 일정 (요일은 datetime.weekday() 기준, 월요일 = 0)"""
    name: str
    draw_days: Tuple[int, ...]
    draw_time: time
    timezone: str
    data_delay_hours: int

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def draw_days_text(self) -> str:
        return ', '.join(DAY_NAMES[day] for day in self.draw_days)

DRAW_SCHEDULES: Dict[str, DrawSchedule] = {
    'powerball': DrawSchedule('Powerball', (0, 2, 5), time(22, 59), 'America/New_York', 2),
    'megamillions': DrawSchedule('Mega Millions', (1, 4), time(23, 0), 'America/New_York', 2),
    'euromillions': DrawSchedule('EuroMillions', (1, 4), time(20, 30), 'Europe/London', 1),
}

@dataclass(frozen=True)
class DrawTiming:
    """다음 추첨과 결과 공개 시각"""
    lottery: str
    draw_at: datetime
    data_available_at: datetime
    hours_until: int

    @property
    def draw_day(self) -> str:
        return DAY_NAMES[self.draw_at.weekday()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lottery': self.lottery,
            'nextDrawDay': self.draw_day,
            'drawAt': self.draw_at.isoformat(),
            'dataAvailableAt': self.data_available_at.isoformat(),
            'hoursUntil': self.hours_until
        }

def get_schedule(lottery_type: str) -> Optional[DrawSchedule]:
    return DRAW_SCHEDULES.get((lottery_type or '').lower())

def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """시간대 이름을 tzinfo로 변환 (None이면 시스템 로컬 시간대)"""
    if name:
        return ZoneInfo(name)
    return datetime.now().astimezone().tzinfo

def timezone_label(tz: tzinfo) -> str:
    return getattr(tz, 'key', None) or datetime.now(tz).tzname() or 'UTC'

def _aware(now: Optional[datetime]) -> datetime:
    # 시간대가 없는 시각은 UTC로 간주
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now

def _draw_times(schedule: DrawSchedule, now: datetime) -> Iterator[datetime]:
    # 공개 지연이 자정을 넘길 수 있으므로 현지 기준 전날부터 검사
    start = now.astimezone(schedule.zone).date() - timedelta(days=1)
    for offset in range(9):
        day = start + timedelta(days=offset)
        if day.weekday() in schedule.draw_days:
            yield datetime.combine(day, schedule.draw_time, tzinfo=schedule.zone)

def next_draw(lottery_type: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    now 이후 첫 추첨 시각

    Args:
        lottery_type: 복권 종류
        now: 기준 시각 (기본값 현재 시각)

    Returns:
        복권 현지 시간대의 추첨 시각. 일정이 없는 복권이면 None
    """
    schedule = get_schedule(lottery_type)
    if schedule is None:
        return None

    now = _aware(now)
    return next((draw_at for draw_at in _draw_times(schedule, now) if draw_at > now), None)

def next_data_availability(lottery_type: str, now: Optional[datetime] = None) -> Optional[DrawTiming]:
    """
    아직 공개되지 않은 가장 가까운 추첨 결과의 공개 시각

    추첨이 끝났더라도 공개 지연 시간이 지나지 않았으면 그 추첨을 반환합니다.
    """
    schedule = get_schedule(lottery_type)
    if schedule is None:
        return None

    now = _aware(now)
    delay = timedelta(hours=schedule.data_delay_hours)
    for draw_at in _draw_times(schedule, now):
        available_at = draw_at + delay
        if available_at > now:
            hours_until = round((available_at - now).total_seconds() / 3600)
            return DrawTiming(lottery_type.lower(), draw_at, available_at, hours_until)
    return None

def is_data_stale(last_fetched_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """마지막 조회 시각이 없거나 오래되었으면 True"""
    if last_fetched_at is None:
        return True
    return _aware(now) - _aware(last_fetched_at) > STALE_AFTER

def format_next_refresh(
    lottery_type: str,
    last_fetched_at: Optional[datetime] = None,
    user_tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None
) -> Optional[str]:
    """
    다음 데이터 갱신 안내 문구

    Args:
        lottery_type: 복권 종류
        last_fetched_at: 마지막 이력 조회 시각
        user_tz: 표시할 시간대 (기본값 시스템 로컬)
        now: 기준 시각

    Returns:
        안내 문구. 일정이 없는 복권이면 None
    """
    timing = next_data_availability(lottery_type, now)
    if timing is None:
        return None

    if is_data_stale(last_fetched_at, now):
        return '⚠️  Data is stale! Fresh data available now. Run the automation to get latest results.'

    user_tz = user_tz or resolve_timezone()
    local_time = timing.data_available_at.astimezone(user_tz).strftime('%I:%M %p')

    if timing.hours_until < 1:
        return '🔄 Fresh data available in less than 1 hour! Check back soon.'
    if timing.hours_until < 24:
        return f"📅 Next fresh data available in ~{timing.hours_until} hours ({timing.draw_day} at {local_time})"

    days = timing.hours_until // 24
    return f"📅 Next fresh data in ~{days} day{'s' if days > 1 else ''} ({timing.draw_day} at {local_time})"

def format_schedule_summary(user_tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> str:
    """전체 복권의 추첨 일정을 사용자 시간대로 표시"""
    user_tz = user_tz or resolve_timezone()
    now = _aware(now)

    lines = [
        '',
        'LOTTERY DRAW SCHEDULES',
        f"Your Timezone: {timezone_label(user_tz)}",
        '',
    ]
    for lottery_type, schedule in DRAW_SCHEDULES.items():
        draw_at = next_draw(lottery_type, now).astimezone(user_tz)
        plural = 's' if schedule.data_delay_hours > 1 else ''
        lines.extend([
            schedule.name.upper(),
            '─' * 60,
            f"Draw Days: {schedule.draw_days_text} ({schedule.timezone})",
            f"Next Draw: {draw_at.strftime('%A %b %d, %I:%M %p')} (your local time)",
            f"Data Available: ~{schedule.data_delay_hours} hour{plural} after draw",
            '',
        ])
    return '\n'.join(lines)
