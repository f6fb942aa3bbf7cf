"""
どこで: `engine.core` サブパッケージ。
何を: Vector2・Path・属性レコード・アンカー・点変換関数・Diagram（シーングラフ）と結合子を提供。
なぜ: 図形/加工/整列の各層が依存する唯一の中核データモデルを 1 箇所にまとめるため。
"""
