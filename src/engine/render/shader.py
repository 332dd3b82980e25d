"""
どこで: `engine.render.shader`。
何を: ワイヤーフレーム描画用の GLSL プログラム（インスタンス行列 + VP 行列 + 単色）を生成。
なぜ: シェーダ文字列とプログラム生成を Renderer 本体から分離するため。
"""

from __future__ import annotations

from typing import Any

# in_model はインスタンスごとのワールド行列（列優先 16 float）
VERTEX_SHADER = """
#version 330
uniform mat4 view_projection;
in vec3 in_vert;
in mat4 in_model;
void main() {
    gl_Position = view_projection * in_model * vec4(in_vert, 1.0);
}
"""

FRAGMENT_SHADER = """
#version 330
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""


class Shader:
    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """ModernGL コンテキストからラインプログラムを生成して返す。"""
        return ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
