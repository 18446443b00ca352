SHADER_VERSION = "1.0"

# Uniforms the flow program reads, with their GLSL types.
FLOW_UNIFORMS = {
    "u_time": "float",
    "u_resolution": "vec2",
    "u_pointer": "vec2",
    "u_color1": "vec3",
    "u_color2": "vec3",
    "u_color3": "vec3",
    "u_color4": "vec3",
}

VS_FLOW = """
#version 330
uniform mat4 u_mvp;
in vec2 in_vert;
in vec2 in_uv;
out vec2 v_uv;
void main(){
    v_uv = in_uv;
    gl_Position = u_mvp * vec4(in_vert, 0.0, 1.0);
}
"""

FS_FLOW = """
#version 330
uniform float u_time;
uniform vec2 u_resolution;
uniform vec2 u_pointer;   // fed every frame, not read by the composition below
uniform vec3 u_color1;
uniform vec3 u_color2;
uniform vec3 u_color3;
uniform vec3 u_color4;

in vec2 v_uv;
out vec4 fragColor;

float hash(vec2 st){
    return fract(sin(dot(st, vec2(12.9898, 78.233))) * 43758.5453123);
}

float noise(vec2 st){
    vec2 i = floor(st);
    vec2 f = fract(st);
    float a = hash(i);
    float b = hash(i + vec2(1.0, 0.0));
    float c = hash(i + vec2(0.0, 1.0));
    float d = hash(i + vec2(1.0, 1.0));
    vec2 u = f * f * (3.0 - 2.0 * f);
    return mix(a, b, u.x) + (c - a) * u.y * (1.0 - u.x) + (d - b) * u.x * u.y;
}

float fbm(vec2 st){
    float value = 0.0;
    float amplitude = 0.5;
    for (int i = 0; i < 3; i++){
        value += amplitude * noise(st);
        st *= 2.0;
        amplitude *= 0.5;
    }
    return value;
}

void main(){
    vec2 st = gl_FragCoord.xy / u_resolution.xy;
    st.x *= u_resolution.x / u_resolution.y;

    vec2 q = vec2(fbm(st + 0.1 * u_time), fbm(st + vec2(1.0, 0.0)));
    vec2 r = vec2(
        fbm(st + q + vec2(1.7, 9.2) + 0.15 * u_time),
        fbm(st + q + vec2(8.3, 2.8) + 0.126 * u_time)
    );
    float f = fbm(st + r);

    vec3 color = mix(u_color1, u_color2, clamp(f * f * 4.0, 0.0, 1.0));
    color = mix(color, u_color3, clamp(length(q), 0.0, 1.0));
    color = mix(color, u_color4, clamp(abs(r.x), 0.0, 1.0));

    color += hash(st * u_time) * 0.15;

    color *= 1.0 - smoothstep(0.5, 1.5, length(v_uv - 0.5));

    fragColor = vec4(color, 1.0);
}
"""

VS_TEXT = """
#version 330
in vec2 in_vert;
in vec2 in_uv;
out vec2 uv;
void main() {
    gl_Position = vec4(in_vert, 0.0, 1.0);
    uv = in_uv;
}
"""

FS_TEXT = """
#version 330
in vec2 uv;
out vec4 fragColor;
uniform sampler2D fontTexture;
uniform vec3 textColor;
uniform float alpha;
void main() {
    float coverage = texture(fontTexture, uv).r;
    fragColor = vec4(textColor, coverage * alpha);
}
"""
