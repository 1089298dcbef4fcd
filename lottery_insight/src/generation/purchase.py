"""
티켓 구매처 안내 텍스트
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

DOUBLE_RULE = '═' * 59
RULE = '─' * 59

@dataclass(frozen=True)
class CourierService:
    """대행 구매 서비스"""
    name: str
    url: str
    coverage: str
    features: Tuple[str, ...]
    lotteries: Tuple[str, ...]
    rating: float
    established: int

    @property
    def international(self) -> bool:
        return 'International' in self.coverage

@dataclass(frozen=True)
class OfficialSite:
    """공식 판매 안내"""
    name: str
    url: str
    availability: str
    info: str

COURIER_SERVICES: Tuple[CourierService, ...] = (
    CourierService(
        name='TheLotter',
        url='https://www.thelotter.com',
        coverage='International (60+ lotteries)',
        features=(
            'Worldwide access to major lotteries',
            'Automatic ticket scanning',
            'Mobile app available',
            'Multi-draw subscriptions',
        ),
        lotteries=('Powerball', 'Mega Millions', 'EuroMillions', 'EuroJackpot'),
        rating=4.5,
        established=2002,
    ),
)

OFFICIAL_SITES: Dict[str, OfficialSite] = {
    'powerball': OfficialSite(
        'Powerball', 'https://www.powerball.com',
        'Available in 45 US states + DC, Puerto Rico, US Virgin Islands',
        'Must be 18+ (19+ in some states). Purchase from authorized retailers only.'
    ),
    'megamillions': OfficialSite(
        'Mega Millions', 'https://www.megamillions.com',
        'Available in 45 US states + DC, US Virgin Islands',
        'Must be 18+ (19+ in some states). Find retailers at official website.'
    ),
}

NOTES = (
    'Always verify the service is licensed in your jurisdiction',
    'Check service fees and commission rates',
    'Enable two-factor authentication for account security',
    'Services will scan and email you the actual ticket',
    'Winnings are typically credited to your account',
    'Large jackpots may require in-person claim',
)

def recommended_services(location: str = 'US') -> List[CourierService]:
    # 현재 등록된 서비스는 모두 해외 구매를 지원하므로 지역과 무관하게 같은 목록
    return [service for service in COURIER_SERVICES if service.international]

def official_site(lottery_type: str) -> Optional[OfficialSite]:
    return OFFICIAL_SITES.get((lottery_type or '').lower())

def _service_lines(index: int, service: CourierService, suffix: str = '') -> List[str]:
    lines = [
        f"{index}. {service.name} ⭐ {service.rating}/5{suffix}",
        f"   Website: {service.url}",
        f"   Coverage: {service.coverage}",
        f"   Established: {service.established}",
        '',
        '   Features:',
    ]
    lines.extend(f"   • {feature}" for feature in service.features)
    lines.append('')
    return lines

def format_purchase_info(lottery_type: str, location: str = 'US') -> str:
    """
    구매처 안내 문구

    Args:
        lottery_type: 복권 종류, 여러 복권을 함께 안내할 때는 'both' 또는 'all'
        location: 구매 지역

    Returns:
        여러 줄 텍스트
    """
    lottery_type = lottery_type.lower()
    lines: List[str] = []

    if lottery_type in ('both', 'all'):
        if lottery_type == 'all':
            lines.append('RECOMMENDED SERVICES FOR ALL THREE LOTTERIES:')
        else:
            lines.append('RECOMMENDED SERVICES FOR BOTH POWERBALL & MEGA MILLIONS:')
        lines.extend([RULE, ''])
        if lottery_type == 'all':
            lines.extend([
                '🌍 For EuroMillions (International Players):',
                '   TheLotter is HIGHLY RECOMMENDED for international access',
                '',
            ])
        for index, service in enumerate(COURIER_SERVICES, 1):
            lines.extend(_service_lines(index, service))
    else:
        euromillions = lottery_type == 'euromillions'
        lines.extend([
            '',
            DOUBLE_RULE,
            '           WHERE TO PURCHASE YOUR TICKETS',
            DOUBLE_RULE,
            '',
            f"Lottery: {lottery_type.upper()}",
            f"Location: {'International' if euromillions else location}",
            '',
            'HIGHLY RECOMMENDED SERVICE:' if euromillions else 'RECOMMENDED SERVICES:',
            RULE,
            '',
        ])
        suffix = ' (BEST FOR EUROMILLIONS)' if euromillions else ''
        for index, service in enumerate(recommended_services(location), 1):
            lines.extend(_service_lines(index, service, suffix))

        site = official_site(lottery_type)
        if site is not None:
            lines.extend([
                f"Official: {site.name} - {site.url}",
                f"   {site.availability}",
                f"   {site.info}",
                '',
            ])

    lines.extend([RULE, 'IMPORTANT NOTES:'])
    lines.extend(f"• {note}" for note in NOTES)
    if lottery_type != 'both':
        lines.extend([DOUBLE_RULE, ''])
    return '\n'.join(lines)
