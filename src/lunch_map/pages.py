"""
HTML page templates for the web server
"""

BASE_TEMPLATE = '''<!DOCTYPE html>
<html lang="ja">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{% block title %}ランチマップ{% endblock %}</title>
    {% block head %}{% endblock %}
    <style>
        body { font-family: 'Hiragino Kaku Gothic ProN', Arial, sans-serif; margin: 0; background: #f9fafb; color: #1f2937; }
        header { background: white; border-bottom: 1px solid #e5e7eb; padding: 12px 24px; display: flex; justify-content: space-between; align-items: center; }
        header a { text-decoration: none; color: #1f2937; font-weight: bold; }
        .button { background: #FF6B35; color: white; padding: 8px 16px; border: none; border-radius: 8px; cursor: pointer; text-decoration: none; display: inline-block; }
        .button:hover { background: #E63E00; }
        .button.secondary { background: #e5e7eb; color: #374151; }
        .card { background: white; border: 1px solid #e5e7eb; padding: 20px; margin: 20px 0; border-radius: 8px; }
        .tag { padding: 3px 8px; border-radius: 12px; font-size: 12px; display: inline-block; margin-right: 4px; }
        .cuisine-tag { background: #FF6B35; color: white; }
        .price-tag { background: #F3F4F6; color: #6B7280; }
        .status-tag.open, .open-tag { background: #D1FAE5; color: #065F46; }
        .status-tag.closed, .closed-tag { background: #FEE2E2; color: #991B1B; }
        .bg-green-100 { background: #dcfce7; } .text-green-800 { color: #166534; }
        .bg-yellow-100 { background: #fef9c3; } .text-yellow-800 { color: #854d0e; }
        .bg-red-100 { background: #fee2e2; } .text-red-800 { color: #991b1b; }
        .error { background: #f8d7da; color: #721c24; padding: 16px; border-radius: 8px; }
        main { max-width: 960px; margin: 0 auto; padding: 24px; }
    </style>
</head>
<body>
    <header>
        <a href="{{ url_for('landing') }}">🍽️ ランチマップ</a>
        {% block header_action %}<a class="button" href="{{ url_for('map_page') }}">地図を見る</a>{% endblock %}
    </header>
    {% block body %}{% endblock %}
</body>
</html>
'''

LANDING_TEMPLATE = '''{% extends "base.html" %}
{% block title %}ランチマップ - 東京のランチスポット検索{% endblock %}
{% block body %}
<main>
    <div class="card" style="text-align: center;">
        <h1>🍽️ ランチマップ</h1>
        <p>東京都内のランチスポットを地図で探そう</p>
        <a class="button" href="{{ url_for('map_page') }}">地図を見る</a>
    </div>
    <div class="card">
        <h2>🗺️ 地図で探す</h2>
        <p>現在地周辺のランチスポットを地図上で確認できます。</p>
        <h2>🔍 条件で絞り込み</h2>
        <p>料理ジャンル、価格帯、営業状況、混雑度で絞り込めます。</p>
        <h2>📍 東京以外のエリア</h2>
        <p><a href="{{ url_for('coming_soon') }}">他の地域は順次対応予定です</a></p>
    </div>
</main>
{% endblock %}
'''

COMING_SOON_TEMPLATE = '''{% extends "base.html" %}
{% block title %}Coming Soon - ランチマップ{% endblock %}
{% block body %}
<main>
    <div class="card" style="text-align: center;">
        <div style="font-size: 48px;">🚧</div>
        <h1>Coming Soon</h1>
        <p>東京以外の地域も順次対応予定です</p>
    </div>
    <div class="card">
        <h2>展開予定エリア</h2>
        <ul>
        {% for region in regions %}
            <li>{{ region.glyph }} <strong>{{ region.name }}</strong> ({{ region.schedule }})</li>
        {% endfor %}
        </ul>
    </div>
</main>
{% endblock %}
'''

MAP_TEMPLATE = '''{% extends "base.html" %}
{% block title %}地図 - ランチマップ{% endblock %}
{% block head %}
    <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css">
    <script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
    <style>
        .layout { display: flex; height: calc(100vh - 58px); }
        .sidebar { width: 340px; overflow-y: auto; background: white; border-right: 1px solid #e5e7eb; }
        .sidebar section { padding: 12px 16px; border-bottom: 1px solid #e5e7eb; }
        .sidebar label { display: block; font-size: 12px; margin-top: 8px; color: #4b5563; }
        .sidebar select, .sidebar input { width: 100%; padding: 4px; }
        .chips form { display: inline; }
        .chip { padding: 4px 12px; border-radius: 16px; border: none; background: #f3f4f6; cursor: pointer; font-size: 12px; }
        .chip.active { background: #FF6B35; color: white; }
        .restaurant-item { padding: 12px 16px; border-bottom: 1px solid #e5e7eb; }
        .restaurant-item.selected { background: #FFF7ED; }
        .restaurant-item h4 { margin: 0 0 6px 0; }
        #map { flex: 1; }
        .custom-marker-v2 { background: none !important; border: none !important; }
        .restaurant-marker-v2 { width: 36px; height: 36px; border-radius: 18px 18px 18px 4px; border: 3px solid white; display: flex; align-items: center; justify-content: center; box-shadow: 0 4px 12px rgba(0,0,0,0.2); font-size: 18px; }
        .restaurant-marker-v2.closed { background: #94a3b8 !important; }
        .popup-content-v2 { width: 280px; }
        .restaurant-photo { width: 100%; height: 140px; position: relative; overflow: hidden; }
        .restaurant-photo img { width: 100%; height: 100%; object-fit: cover; display: block; }
        .photo-overlay { position: absolute; bottom: 8px; right: 8px; }
        .rating-badge { background: rgba(0,0,0,0.7); color: white; padding: 4px 8px; border-radius: 12px; font-size: 12px; }
        .rating-score { color: #FFD700; font-weight: bold; }
        .popular-menu { background: #FFF7ED; border: 1px solid #FDBA74; border-radius: 6px; padding: 6px 8px; margin: 8px 0; }
        .menu-label { font-size: 10px; color: #EA580C; font-weight: bold; display: block; }
        .view-detail-btn { width: 100%; background: #FF6B35; color: white; border: none; padding: 10px; border-radius: 8px; cursor: pointer; margin-top: 12px; }
    </style>
{% endblock %}
{% block body %}
<div class="layout">
    <aside class="sidebar">
        <section>
            <h2 style="font-size: 16px; margin: 0;">絞り込み</h2>
            <div class="chips">
            {% for cuisine in quick_cuisines %}
                <form method="post" action="{{ url_for('apply_filters') }}">
                    {% for key, value in criteria.items() if key != 'cuisine_type' %}
                    <input type="hidden" name="{{ key }}" value="{{ value }}">
                    {% endfor %}
                    {% if criteria.get('cuisine_type') != cuisine %}
                    <input type="hidden" name="cuisine" value="{{ cuisine }}">
                    {% endif %}
                    <button type="submit" class="chip {% if criteria.get('cuisine_type') == cuisine %}active{% endif %}">{{ cuisine }}</button>
                </form>
            {% endfor %}
            </div>
            <form method="post" action="{{ url_for('apply_filters') }}">
                <label>料理ジャンル
                    <select name="cuisine">
                        <option value="">すべて</option>
                        {% for cuisine in cuisines %}
                        <option value="{{ cuisine }}" {% if criteria.get('cuisine_type') == cuisine %}selected{% endif %}>{{ glyph(cuisine) }} {{ cuisine }}</option>
                        {% endfor %}
                    </select>
                </label>
                <label>価格帯
                    <select name="price_range">
                        <option value="">すべて</option>
                        {% for value, record in price_options %}
                        <option value="{{ value }}" {% if criteria.get('price_range') == value %}selected{% endif %}>{{ record.label }}</option>
                        {% endfor %}
                    </select>
                </label>
                <label>営業状況
                    <select name="is_open">
                        <option value="">すべて</option>
                        <option value="true" {% if criteria.get('is_open') == true %}selected{% endif %}>営業中</option>
                        <option value="false" {% if criteria.get('is_open') == false %}selected{% endif %}>営業時間外</option>
                    </select>
                </label>
                <label>混雑度
                    <select name="crowdedness">
                        <option value="">すべて</option>
                        {% for value, record in crowdedness_options %}
                        <option value="{{ value }}" {% if criteria.get('crowdedness') == value %}selected{% endif %}>{{ record.label }}</option>
                        {% endfor %}
                    </select>
                </label>
                <label>中心の緯度 <input name="lat" value="{{ criteria.get('latitude', '') }}" inputmode="decimal"></label>
                <label>中心の経度 <input name="lng" value="{{ criteria.get('longitude', '') }}" inputmode="decimal"></label>
                <label>半径 (km) <input name="radius" value="{{ criteria.get('radius_km', '') }}" inputmode="decimal"></label>
                <p><button type="submit" class="button">絞り込む</button></p>
            </form>
            {% if criteria %}
            <form method="post" action="{{ url_for('clear_filters') }}">
                <button type="submit" class="button secondary">すべてクリア</button>
            </form>
            {% endif %}
        </section>
        <section>
            <h3 style="font-size: 14px; margin: 0;">{{ restaurants|length }}件のお店</h3>
        </section>
        {% for restaurant in restaurants %}
        <div id="restaurant-{{ restaurant.id }}" class="restaurant-item {% if selected and selected.id == restaurant.id %}selected{% endif %}">
            <h4>{{ glyph(restaurant.cuisine_type) }} {{ restaurant.name }}</h4>
            <span class="tag cuisine-tag">{{ restaurant.cuisine_type }}</span>
            <span class="tag price-tag">{{ price(restaurant.price_range).label }}</span>
            <span class="tag {{ crowdedness(restaurant.crowdedness_level).css_class }}">{{ crowdedness(restaurant.crowdedness_level).label }}</span>
            {% if selected and selected.id == restaurant.id %}
            <p>📍 {{ restaurant.address }}</p>
            {% if restaurant.opening_hours %}<p>🕒 {{ restaurant.opening_hours }}</p>{% endif %}
            {% if restaurant.description %}<p>{{ restaurant.description }}</p>{% endif %}
            <a class="button" href="{{ url_for('restaurant_detail', restaurant_id=restaurant.id) }}">店舗詳細を見る</a>
            {% else %}
            <form method="post" action="{{ url_for('select_restaurant', restaurant_id=restaurant.id) }}">
                <button type="submit" class="chip">地図で選択</button>
            </form>
            {% endif %}
        </div>
        {% endfor %}
    </aside>
    <div id="map"></div>
</div>
<script>
    const mapData = {{ map_data|tojson }};
    const map = L.map('map').setView(mapData.center, mapData.zoom);
    L.tileLayer(mapData.tile_url, { attribution: mapData.attribution }).addTo(map);
    mapData.markers.forEach(function (m) {
        const html = '<div class="restaurant-marker-v2 ' + m.css_class + '" style="background:' + m.color + ';opacity:' + m.opacity + '">' + m.glyph + '</div>';
        const icon = L.divIcon({ html: html, className: 'custom-marker-v2', iconSize: [36, 36], iconAnchor: [18, 36], popupAnchor: [0, -36] });
        L.marker(m.position, { icon: icon, title: m.title }).bindPopup(m.popup_html, { maxWidth: 300 }).addTo(map);
    });
</script>
{% endblock %}
'''

DETAIL_TEMPLATE = '''{% extends "base.html" %}
{% block title %}{{ detail.restaurant.name }} - ランチマップ{% endblock %}
{% block head %}<meta name="description" content="{{ detail.restaurant.name }}の詳細情報。{{ detail.restaurant.address }}にある{{ detail.restaurant.cuisine_type }}のお店です。">{% endblock %}
{% block header_action %}<a class="button" href="{{ url_for('map_page') }}">地図に戻る</a>{% endblock %}
{% block body %}
{% set r = detail.restaurant %}
<main>
    <nav><a href="{{ url_for('landing') }}">ホーム</a> / <a href="{{ url_for('map_page') }}">地図</a> / {{ r.name }}</nav>
    <div class="card">
        {% if detail.photos %}
        {% for photo in detail.photos %}
        <img src="{{ photo.url }}" alt="{{ photo.alt }}" style="max-width: 100%; border-radius: 8px;">
        {% endfor %}
        {% else %}
        <div style="font-size: 64px; text-align: center;">{{ detail.glyph }}</div>
        <p style="text-align: center;">写真準備中</p>
        {% endif %}
        <h1>{{ r.name }}</h1>
        <span class="tag cuisine-tag">{{ r.cuisine_type }}</span>
        <span class="tag price-tag">{{ detail.price.label }}</span>
        <span class="tag {{ detail.status.css_class }}-tag">{{ detail.status.label }}</span>
        <span class="tag {{ detail.crowdedness.css_class }}">{{ detail.crowdedness.label }}</span>
        {% if r.rating %}<p>★{{ r.rating }} ({{ r.review_count or 0 }}件のレビュー)</p>{% endif %}
        {% if r.description %}<p>{{ r.description }}</p>{% endif %}
    </div>
    <div class="card">
        <h2>店舗情報</h2>
        <p>📍 {{ r.address }}</p>
        {% if r.access_info %}<p>🚶 {{ r.access_info }}</p>{% endif %}
        {% if r.phone %}<p>📞 <a href="tel:{{ r.phone }}">{{ r.phone }}</a></p>{% endif %}
        {% if r.opening_hours %}<p>🕒 {{ r.opening_hours }}</p>{% endif %}
        {% if r.lunch_hours %}<p>🍱 ランチ {{ r.lunch_hours }}</p>{% endif %}
        {% if r.closed_days %}<p>📅 定休日 {{ r.closed_days }}</p>{% endif %}
        {% if r.capacity %}<p>👥 約{{ r.capacity }}席</p>{% endif %}
        {% if r.average_budget %}<p>💴 平均予算 {{ "{:,}".format(r.average_budget) }}円</p>{% endif %}
        {% if r.website %}<p>🌐 <a href="{{ r.website }}" target="_blank" rel="noopener noreferrer">{{ r.website }}</a></p>{% endif %}
    </div>
    {% if r.features or r.popular_menu %}
    <div class="card">
        {% if r.features %}<h2>お店の特徴</h2><p>{{ r.features }}</p>{% endif %}
        {% if r.popular_menu %}<h2>人気メニュー</h2><p>{{ r.popular_menu }}</p>{% endif %}
    </div>
    {% endif %}
    <div class="card">
        <h2>地図</h2>
        <p>緯度: {{ r.latitude }} / 経度: {{ r.longitude }}</p>
        <a class="button" href="{{ url_for('map_page') }}">地図で見る</a>
    </div>
</main>
{% endblock %}
'''

ERROR_TEMPLATE = '''{% extends "base.html" %}
{% block title %}{{ title }} - ランチマップ{% endblock %}
{% block body %}
<main>
    <div class="error">
        <h1>{{ title }}</h1>
        <p>{{ message }}</p>
    </div>
    <p><a class="button" href="{{ url_for('map_page') }}">地図に戻る</a></p>
</main>
{% endblock %}
'''

TEMPLATES = {
    'base.html': BASE_TEMPLATE,
    'landing.html': LANDING_TEMPLATE,
    'coming_soon.html': COMING_SOON_TEMPLATE,
    'map.html': MAP_TEMPLATE,
    'detail.html': DETAIL_TEMPLATE,
    'error.html': ERROR_TEMPLATE,
}

PLANNED_REGIONS = [
    {'glyph': '🌆', 'name': '大阪府', 'schedule': '2024年春予定'},
    {'glyph': '🏯', 'name': '愛知県（名古屋）', 'schedule': '2024年夏予定'},
    {'glyph': '🍜', 'name': '福岡県', 'schedule': '2024年秋予定'},
    {'glyph': '⛩️', 'name': '京都府', 'schedule': '2024年冬予定'},
]
