"""dts2rs - TypeScript declaration files to Rust wasm_bindgen bindings"""

__version__ = "0.1.0"
