class Templates:
    """Шаблоны общих частей сгенерированного файла"""

    banner = "/* Generated by openapi-tsgen */\n\n"

    react_query_imports = """import { useQuery, useMutation, useQueryClient, UseQueryOptions, UseMutationOptions } from "react-query";
import axios from "axios";
"""

    common_hooks = """
const useInvalidateQuery = <T extends string>(
  queryKey: string,
  as: T
): Record<T, () => void> => {
  const queryClient = useQueryClient();
  return { [as]: () => queryClient.invalidateQueries(queryKey) } as any;
};
"""

    require = """
type Require<T, R extends keyof T> = T & Required<Pick<T, R>>;
"""

    uri_component_encoding = "const encodingFn = encodeURIComponent;\n"

    rfc3986_encoding = """const encodingFn = (uriComponent: string | number | boolean) => {
  return encodeURIComponent(uriComponent).replace(
    /[!'()*]/g,
    (c: string) => `%${c.charCodeAt(0).toString(16)}`,
  );
};
"""

    encoding_tag = """
const encodingTagFactory = (encodingFn: typeof encodeURIComponent) => (
  strings: TemplateStringsArray,
  ...params: (string | number | boolean)[]
) =>
  strings.reduce(
    (accumulatedPath, pathPart, idx) =>
      `${accumulatedPath}${pathPart}${
        idx < params.length ? encodingFn(params[idx]) : ''
      }`,
    '',
  );

const encode = encodingTagFactory(encodingFn);

"""

    def encoding_function(self, mode: str) -> str:
        """
        Функция кодирования параметров пути.

        `rfc3986` дополнительно кодирует символы `!'()*`,
        `uriComponent` оставляет их как есть.
        """
        if mode == "uriComponent":
            return self.uri_component_encoding
        return self.rfc3986_encoding


templates = Templates()
