"""
Sample Tokyo restaurants inserted on first run
"""

import json
from typing import Any, Dict, List


def _photos(*entries) -> str:
    return json.dumps([{'url': url, 'alt': alt, 'type': kind} for url, alt, kind in entries], ensure_ascii=False)


SAMPLE_RESTAURANTS: List[Dict[str, Any]] = [
    {
        'name': '寿司 銀座',
        'address': '東京都中央区銀座1-1-1',
        'latitude': 35.6712,
        'longitude': 139.7671,
        'cuisine_type': '和食',
        'price_range': 'high',
        'phone': '03-1234-5678',
        'opening_hours': '11:30-14:00,17:00-22:00',
        'description': '老舗の寿司店です',
        'capacity': 20,
        'is_open': True,
        'crowdedness_level': 'moderate',
        'area': '銀座',
        'features': 'カウンター席で職人の技を間近に楽しめる',
        'popular_menu': 'おまかせランチ 3,500円',
        'access_info': '銀座駅 徒歩3分',
        'lunch_hours': '11:30-14:00',
        'closed_days': '月曜日',
        'average_budget': 3500,
        'rating': 4.6,
        'review_count': 128,
        'photos': _photos(
            ('https://placehold.co/600x400?text=Sushi+Ginza', '寿司 銀座 外観', 'exterior'),
            ('https://placehold.co/600x400?text=Omakase', 'おまかせランチ', 'food'),
        ),
    },
    {
        'name': 'イタリアン渋谷',
        'address': '東京都渋谷区渋谷2-2-2',
        'latitude': 35.6598,
        'longitude': 139.7006,
        'cuisine_type': 'イタリアン',
        'price_range': 'medium',
        'phone': '03-2345-6789',
        'opening_hours': '11:00-15:00,17:30-23:00',
        'description': '本格イタリアンレストラン',
        'capacity': 40,
        'is_open': True,
        'crowdedness_level': 'crowded',
        'area': '渋谷',
        'popular_menu': 'パスタランチ 1,500円',
        'access_info': '渋谷駅 徒歩5分',
        'average_budget': 1500,
        'rating': 4.1,
        'review_count': 86,
    },
    {
        'name': 'ラーメン新宿',
        'address': '東京都新宿区新宿3-3-3',
        'latitude': 35.6896,
        'longitude': 139.7006,
        'cuisine_type': '中華',
        'price_range': 'low',
        'phone': '03-3456-7890',
        'opening_hours': '11:00-23:00',
        'description': '美味しいラーメン店',
        'capacity': 15,
        'is_open': True,
        'crowdedness_level': 'moderate',
        'area': '新宿',
        'popular_menu': '醤油ラーメン 850円',
        'average_budget': 900,
    },
    {
        'name': 'カフェ表参道',
        'address': '東京都港区表参道4-4-4',
        'latitude': 35.6646,
        'longitude': 139.7279,
        'cuisine_type': 'カフェ',
        'price_range': 'medium',
        'phone': '03-4567-8901',
        'opening_hours': '08:00-20:00',
        'description': 'おしゃれなカフェ',
        'capacity': 25,
        'is_open': True,
        'crowdedness_level': 'empty',
        'area': '表参道',
        'features': 'テラス席あり・Wi-Fi完備',
        'access_info': '表参道駅 徒歩2分',
        'average_budget': 1200,
        'rating': 4.3,
        'review_count': 54,
        'photos': _photos(
            ('https://placehold.co/600x400?text=Cafe+Omotesando', 'カフェ表参道 店内', 'interior'),
        ),
    },
    {
        'name': '焼き鳥上野',
        'address': '東京都台東区上野5-5-5',
        'latitude': 35.7074,
        'longitude': 139.7754,
        'cuisine_type': '和食',
        'price_range': 'low',
        'phone': '03-5678-9012',
        'opening_hours': '17:00-24:00',
        'description': '美味しい焼き鳥屋',
        'capacity': 30,
        'is_open': False,
        'crowdedness_level': 'moderate',
        'area': '上野',
        'closed_days': '日曜日',
        'average_budget': 2500,
    },
]
